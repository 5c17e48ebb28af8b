# ============================================================================
# CONTAINER INITIALIZER
# ============================================================================
# STATUS: Initializer - Startup entry point
# PURPOSE: Bracket the resolution pass with container provider hooks
# ============================================================================
"""
Container Initializer

Entry point the host calls once at startup, before serving traffic:

    initializer = ContainerInitializer()
    initializer.on_startup(describe_all(classes), context)

Sequence:
1. pre_init for every provider
2. Resolution pass (applications, then default application fallback)
3. post_init for every provider
4. on_register for every provider

The provider list comes from ``provider_factory`` and is resolved once per
call. A RegistrationError from the host aborts startup.
"""

from typing import Callable, Iterable, List, Optional, Set

from core.config import InitializerDefaults, get_defaults
from core.logging import ComponentType, get_logger, log_context
from core.models import TypeDescriptor
from host.context import HostContext
from host.directory import RegistrationError
from initializer.engine import ResolutionEngine, ResolutionResult
from initializer.providers import ContainerProvider, discover_container_providers

logger = get_logger(__name__, ComponentType.INITIALIZER)


def find_container_names(context: HostContext) -> Set[str]:
    """Names of servlet registrations implemented by our container class."""
    return {
        registration.name
        for registration in context.directory.list_servlet_registrations().values()
        if registration.is_container
    }


class ContainerInitializer:
    """Runs container providers and the resolution engine at startup."""

    def __init__(
        self,
        provider_factory: Optional[Callable[[], Iterable[ContainerProvider]]] = None,
        defaults: Optional[InitializerDefaults] = None,
        engine_factory: Callable[..., ResolutionEngine] = ResolutionEngine,
    ):
        """
        Initialize the container initializer.

        Args:
            provider_factory: Returns the ordered providers for a run
                              (defaults to entry point discovery)
            defaults: Registration defaults (uses environment if None)
            engine_factory: Builds the resolution engine for a context
        """
        self.provider_factory = provider_factory or discover_container_providers
        self.defaults = defaults or get_defaults()
        self.engine_factory = engine_factory
        self.last_result: Optional[ResolutionResult] = None

    def on_startup(
        self,
        classes: Optional[Iterable[TypeDescriptor]],
        context: HostContext,
    ) -> ResolutionResult:
        """
        Initialize containers for a deployment.

        Args:
            classes: Discovered type descriptors (None is treated as empty)
            context: Host context owning the registration directory

        Returns:
            ResolutionResult of the resolution pass

        Raises:
            RegistrationError: If the host rejects a registration
        """
        classes = list(classes or ())
        providers: List[ContainerProvider] = list(self.provider_factory())

        logger.info(
            f"Initializing containers for {context.name}",
            extra={"classes": len(classes), "providers": len(providers)},
        )

        with log_context(phase="pre_init"):
            for provider in providers:
                provider.pre_init(context, classes)

        with log_context(phase="resolve"):
            engine = self.engine_factory(context, defaults=self.defaults)
            try:
                result = engine.resolve(classes)
            except RegistrationError as e:
                logger.error(f"Container initialization failed: {e}")
                raise

        with log_context(phase="post_init"):
            for provider in providers:
                provider.post_init(context, classes, find_container_names(context))

        with log_context(phase="on_register"):
            for provider in providers:
                provider.on_register(context, find_container_names(context))

        self.last_result = result
        return result


__all__ = [
    "ContainerInitializer",
    "find_container_names",
]
