# ============================================================================
# ASGI HOST
# ============================================================================
# STATUS: Host - FastAPI application hosting initialized containers
# PURPOSE: Run the initializer at startup and mount mapped containers
# ============================================================================
"""
ASGI Host

FastAPI application that:
1. Runs the container initializer in its lifespan, before serving traffic
2. Eagerly initializes containers in load-on-startup order
3. Mounts every mapped container registration at its prefix

Usage:
    context = load_descriptor("deployment.yaml")
    app = create_app(describe_all([ShopApplication, OrderResource]), context)

    uvicorn module:app
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, Iterable, List, Optional

from fastapi import FastAPI

from __version__ import __version__
from core.logging import ComponentType, configure_logging, get_logger
from core.models import Registration, TypeDescriptor
from host.context import HostContext, get_stored_resource_config
from initializer.container import ApplicationContainer
from initializer.mapping import is_prefix_mapping, mapping_prefix
from initializer.startup import ContainerInitializer

logger = get_logger(__name__, ComponentType.HOST)


def _resolve_container(
    registration: Registration,
    context: HostContext,
) -> Optional[ApplicationContainer]:
    if isinstance(registration.instance, ApplicationContainer):
        return registration.instance

    if not registration.is_container:
        return None

    # Declared container class: instantiate from the stored config
    resource_config = get_stored_resource_config(context, registration.name)
    if resource_config is None:
        logger.warning(f"No resource config stored for {registration.name}; not mounted")
        return None

    container = ApplicationContainer(resource_config)
    registration.instance = container
    return container


def mount_registrations(app: FastAPI, context: HostContext) -> List[str]:
    """
    Mount every mapped container registration on ``app``.

    Only prefix patterns ("/prefix/*", "/*") can be mounted; extension and
    exact patterns are skipped with a warning.

    Returns:
        Mounted mapping patterns, in mount order
    """
    registrations = list(context.directory.list_servlet_registrations().values())

    containers: Dict[str, ApplicationContainer] = {}
    for registration in registrations:
        container = _resolve_container(registration, context)
        if container is not None:
            containers[registration.name] = container

    eager = [
        r for r in registrations
        if r.name in containers and r.load_on_startup is not None and r.load_on_startup >= 0
    ]
    for registration in sorted(eager, key=lambda r: r.load_on_startup):
        containers[registration.name].initialize()

    mounts = []
    for registration in registrations:
        if registration.name not in containers:
            continue
        for mapping in registration.mappings:
            if not is_prefix_mapping(mapping):
                logger.warning(
                    f"Mapping {mapping} of {registration.name} is not a prefix pattern; not mounted"
                )
                continue
            mounts.append((mapping, registration.name))

    # Longest prefix first so "/*" does not shadow narrower mounts
    mounts.sort(key=lambda m: len(mapping_prefix(m[0])), reverse=True)

    mounted: List[str] = []
    for mapping, name in mounts:
        app.mount(mapping_prefix(mapping), containers[name], name=name)
        mounted.append(mapping)
        logger.info(f"Mounted {name} at {mapping}")

    return mounted


def create_app(
    classes: Optional[Iterable[TypeDescriptor]],
    context: HostContext,
    initializer: Optional[ContainerInitializer] = None,
) -> FastAPI:
    """
    Create the host application.

    Args:
        classes: Discovered type descriptors
        context: Host context (usually from load_descriptor)
        initializer: Container initializer (default providers if None)

    Logging is configured from the initializer defaults (LOG_LEVEL, LOG_FORMAT).
    """
    initializer = initializer or ContainerInitializer()
    configure_logging(
        level=initializer.defaults.log_level,
        json_output=initializer.defaults.json_logging,
    )
    classes = list(classes or ())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting container host v{__version__} for {context.name}")
        initializer.on_startup(classes, context)
        mount_registrations(app, context)
        yield
        logger.info("Container host stopped")

    app = FastAPI(title=f"Container host ({context.name})", version=__version__, lifespan=lifespan)
    app.state.host_context = context

    @app.get("/_host/registrations")
    async def list_registrations() -> List[Dict[str, Any]]:
        """Servlet registrations as resolved at startup."""
        return [
            r.to_dict() for r in context.directory.list_servlet_registrations().values()
        ]

    return app


__all__ = [
    "mount_registrations",
    "create_app",
]
