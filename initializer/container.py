# ============================================================================
# APPLICATION CONTAINER
# ============================================================================
# STATUS: Initializer - Handler unit bound to one registration
# PURPOSE: ASGI application serving one ResourceConfig
# ============================================================================
"""
Application Container

The handler unit the initializer instantiates for a registration. It is an
ASGI callable; the FastAPI application behind it is built on first use (or
eagerly via initialize() for load-on-startup registrations).

Resource classes contribute endpoints by exposing a FastAPI ``router``
attribute. Config properties are available to endpoints through
``request.app.state.properties``.
"""

from typing import Any, List, Optional

from fastapi import APIRouter, FastAPI

from core.logging import get_logger
from core.models import ResourceConfig

logger = get_logger(__name__)


class ApplicationContainer:
    """ASGI handler unit for one deployed application."""

    def __init__(self, resource_config: Optional[ResourceConfig] = None):
        self.resource_config = resource_config or ResourceConfig.for_default_application(())
        self._app: Optional[FastAPI] = None

    @property
    def is_initialized(self) -> bool:
        return self._app is not None

    @property
    def app(self) -> FastAPI:
        if self._app is None:
            self.initialize()
        return self._app

    def initialize(self) -> FastAPI:
        """Build the FastAPI application (idempotent)."""
        if self._app is not None:
            return self._app

        config = self.resource_config
        app = FastAPI(title=config.application_name)
        app.state.properties = dict(config.properties)
        app.state.resource_config = config

        included: List[str] = []
        for descriptor in config.classes:
            router = getattr(descriptor.type_, "router", None)
            if isinstance(router, APIRouter):
                app.include_router(router, prefix=_router_prefix(descriptor.resource_path))
                included.append(descriptor.name)

        logger.info(
            f"Initialized container for {config.application_name}",
            extra={"routers": included, "classes": len(config.classes)},
        )
        self._app = app
        return app

    async def __call__(self, scope: Any, receive: Any, send: Any) -> None:
        await self.app(scope, receive, send)


def _router_prefix(resource_path: Optional[str]) -> str:
    stripped = (resource_path or "").strip("/")
    return "/" + stripped if stripped else ""


__all__ = ["ApplicationContainer"]
