# src/adms_gateway/main.py
"""Main entry point for the ADMS gateway."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from adms_gateway.api import admin_router, iclock_router
from adms_gateway.api.dependencies import SessionHandlerDep
from adms_gateway.core.settings import settings

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="ADMS push-protocol gateway for biometric attendance terminals",
    version=settings.app_version,
)

# Include API routers
app.include_router(iclock_router)
app.include_router(admin_router)


def configure_logging() -> None:
    """Apply the configured level to the gateway's loggers."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("adms_gateway").setLevel(settings.log_level.upper())


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    logger.info(
        "ADMS gateway ready (resync every %ss, device offset UTC%+g)",
        settings.resync_interval_seconds,
        settings.device_utc_offset_hours,
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root(handler: SessionHandlerDep) -> dict[str, object]:
    """Root endpoint with basic information about the gateway."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "pending_commands": {
            serial: handler.queue.pending(serial) for serial in handler.queue.serials()
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("adms_gateway.main:app", host=settings.host, port=settings.port, reload=settings.debug)
