# ============================================================================
# CONTAINER PROVIDERS
# ============================================================================
# STATUS: Initializer - Extension hooks around the resolution pass
# PURPOSE: Register, discover and run container provider callbacks
# ============================================================================
"""
Container Providers

Extensions that observe container initialization. Each provider is called
in three strictly sequential groups:

    pre_init(context, classes)                 before resolution
    post_init(context, classes, names)         after resolution
    on_register(context, names)                after every post_init

``names`` are the registrations implemented by our container class.

Usage:
    registry = ContainerProviderRegistry()
    registry.register(MetricsProvider())

    initializer = ContainerInitializer(provider_factory=registry.get_all)

    # Or discover installed providers via entry points (the default)
    providers = discover_container_providers()
"""

from abc import ABC
from importlib.metadata import entry_points
from typing import Any, Iterable, List, Optional, Sequence, Set, Type

from core.config import get_defaults
from core.logging import get_logger
from core.models import TypeDescriptor

logger = get_logger(__name__)


class ContainerProvider(ABC):
    """
    Base class for container providers.

    Override any of the three hooks; the defaults do nothing.
    """

    name: str = "unnamed"

    def pre_init(self, context: Any, classes: Sequence[TypeDescriptor]) -> None:
        """Called before any registration is resolved."""

    def post_init(
        self,
        context: Any,
        classes: Sequence[TypeDescriptor],
        container_names: Set[str],
    ) -> None:
        """Called after resolution with the container registration names."""

    def on_register(self, context: Any, container_names: Set[str]) -> None:
        """Called once every provider has run post_init."""


class ContainerProviderRegistry:
    """
    Ordered collection of container providers.

    Providers run in registration order. Instances are scoped to one
    initializer run; there is no process-wide registry.
    """

    def __init__(self, providers: Optional[Iterable[ContainerProvider]] = None):
        self._providers: List[ContainerProvider] = []
        for provider in providers or ():
            self.register(provider)

    def register(self, provider: ContainerProvider) -> None:
        """Append a provider instance."""
        if provider in self._providers:
            logger.warning(f"Container provider already registered: {provider.name}")
            return
        self._providers.append(provider)
        logger.debug(f"Registered container provider: {provider.name}")

    def register_class(
        self,
        provider_class: Type[ContainerProvider],
        **kwargs
    ) -> ContainerProvider:
        """Instantiate and register a provider class."""
        instance = provider_class(**kwargs)
        self.register(instance)
        return instance

    def get_all(self) -> List[ContainerProvider]:
        return list(self._providers)

    def clear(self) -> None:
        self._providers.clear()

    def __len__(self) -> int:
        return len(self._providers)

    def __iter__(self):
        return iter(list(self._providers))


def discover_container_providers(group: Optional[str] = None) -> List[ContainerProvider]:
    """
    Load providers advertised through package entry points.

    Entry points are loaded in name order. Each entry point may name either
    a ContainerProvider subclass (instantiated without arguments) or an
    instance; an instance advertised twice is kept once.

    Args:
        group: Entry point group (defaults to the configured group)
    """
    group = group or get_defaults().provider_group
    registry = ContainerProviderRegistry()

    for entry_point in sorted(entry_points(group=group), key=lambda ep: ep.name):
        target = entry_point.load()
        if isinstance(target, type):
            target = target()
        if not isinstance(target, ContainerProvider):
            raise TypeError(
                f"Entry point {entry_point.name} in {group} is not a ContainerProvider"
            )
        registry.register(target)
        logger.debug(f"Discovered container provider {entry_point.name}")

    return registry.get_all()


__all__ = [
    "ContainerProvider",
    "ContainerProviderRegistry",
    "discover_container_providers",
]
