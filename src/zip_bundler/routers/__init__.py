from .zip_router import router as zip_router
from .health_router import router as health_router

__all__ = ["zip_router", "health_router"]
