from __future__ import annotations

import os

import uvicorn

from .config import settings


def main() -> None:
    reload_flag = os.getenv("RELOAD", "0") in ("1", "true", "True")
    uvicorn.run(
        "zip_bundler.main:app",
        host=settings.host,
        port=settings.port,
        reload=reload_flag,
        log_level="info",
    )


if __name__ == "__main__":
    main()
