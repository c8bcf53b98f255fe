from __future__ import annotations
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..routers.zip_router import SKIPPED_HEADER
from .correlation import HEADER_NAME


def add_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],          # tighten in prod
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        # browsers only see these if listed
        expose_headers=["Content-Disposition", SKIPPED_HEADER, HEADER_NAME],
        max_age=600,
    )
