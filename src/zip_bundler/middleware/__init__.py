from .cors import add_cors
from .correlation import CorrelationIdFilter, CorrelationIdMiddleware, add_correlation_middleware, get_correlation_id
from .logging import RequestLoggingMiddleware, install_request_logging
from .error_handlers import add_error_handlers

__all__ = [
    "add_cors",
    "CorrelationIdFilter",
    "CorrelationIdMiddleware",
    "add_correlation_middleware",
    "get_correlation_id",
    "RequestLoggingMiddleware",
    "install_request_logging",
    "add_error_handlers",
]
