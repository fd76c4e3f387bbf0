from __future__ import annotations

import os

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

# Open header set sent on verification responses when every origin is allowed
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def allowed_origins() -> list[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()] or ["*"]


def cors_headers() -> dict[str, str]:
    """Headers to stamp on responses ourselves.

    With a restricted allow-list this is empty and ``CORSMiddleware`` alone
    decides which origins get an ``Access-Control-Allow-Origin`` header.
    """
    if "*" in allowed_origins():
        return dict(CORS_HEADERS)
    return {}


def add_default_middlewares(app: FastAPI) -> None:
    origins = allowed_origins()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Wildcard origins cannot be combined with credentials
        allow_credentials="*" not in origins,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )
