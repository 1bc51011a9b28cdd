"""FastAPI application for the Beacon credential service.

Usage:
    >>> from beacon.api import create_app
    >>> from beacon import create_factory
    >>> app = create_app(factory=create_factory("mock"))
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from beacon.api.errors import register_exception_handlers
from beacon.api.routes import router
from beacon.config import Settings
from beacon.core.factory import BeaconFactory, create_factory_from_settings

SERVICE_NAME = "beacon"


def create_app(
    factory: Optional[BeaconFactory] = None,
    settings: Optional[Settings] = None,
    api_prefix: Optional[str] = None,
) -> FastAPI:
    """Build the application.

    Args:
        factory: Component factory; built from settings when omitted
        settings: Environment settings; read from the environment when both
            factory and settings are omitted
        api_prefix: Path prefix for the flow routes; defaults to the
            settings value, or "/api"
    """
    if factory is None:
        settings = settings or Settings.from_env()
        factory = create_factory_from_settings(settings)
    if api_prefix is None:
        api_prefix = settings.api_prefix if settings is not None else "/api"

    app = FastAPI(title="Beacon", docs_url=None, redoc_url=None)
    app.state.factory = factory
    register_exception_handlers(app)

    @app.get("/health")
    async def health() -> dict:
        return {"ok": True, "service": SERVICE_NAME}

    app.include_router(router, prefix=api_prefix)
    return app


__all__ = ["create_app", "SERVICE_NAME"]
