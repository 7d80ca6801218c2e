"""
ASGI application.

Run with:
    uvicorn ceprace.main:app
"""

from __future__ import annotations

from fastapi import FastAPI

from ceprace.api.routes import router
from ceprace.core.config import get_settings
from ceprace.core.logging import configure_logging


settings = get_settings()
configure_logging(settings.debug, settings.log_level)

app = FastAPI(title="CEP Race API", version="0.1.0", debug=settings.debug)

app.include_router(router)


@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Return basic service health."""

    return {"status": "ok"}
