# ============================================================================
# DEFAULT APPLICATION FALLBACK
# ============================================================================
# STATUS: Initializer - Catch-all application handling
# PURPOSE: Configure registrations that name no Application subclass
# ============================================================================
"""
Default Application Fallback

Runs after every Application subclass has been resolved.

1. A servlet registration named DEFAULT_APPLICATION_NAME publishes every
   discovered root resource and provider. A declared class only needs its
   config stored; a name-only declaration gets a container bound to it.
2. Any other servlet registration implemented by our container class, not
   claimed by an application and without init parameters, is treated the
   same way: it gets the default config stored under its name.
"""

from typing import Any, Callable, Collection, List, Optional, Sequence

from core.config import InitializerDefaults, get_defaults
from core.contracts import DEFAULT_APPLICATION_NAME
from core.logging import get_logger, log_context
from core.models import ResourceConfig, TypeDescriptor
from host.context import HostContext, store_resource_config
from initializer.container import ApplicationContainer

logger = get_logger(__name__)


class DefaultApplicationFallback:
    """Configures the default application and implicit default containers."""

    def __init__(
        self,
        context: HostContext,
        defaults: Optional[InitializerDefaults] = None,
        container_factory: Callable[[ResourceConfig], Any] = ApplicationContainer,
        store: Callable[[ResourceConfig, HostContext, str], None] = store_resource_config,
    ):
        self.context = context
        self.defaults = defaults or get_defaults()
        self.container_factory = container_factory
        self.store = store

    def apply(
        self,
        app_classes: Sequence[TypeDescriptor],
        claimed: Collection[str],
    ) -> List[str]:
        """
        Configure default registrations.

        Args:
            app_classes: Every discovered root resource and provider
            claimed: Names of registrations bound to an Application subclass

        Returns:
            Names of registrations configured as the default application
        """
        directory = self.context.directory
        configured: List[str] = []

        registration = directory.get_servlet_registration(DEFAULT_APPLICATION_NAME)

        if registration is not None:
            with log_context(registration=registration.name):
                resource_config = (
                    ResourceConfig.for_default_application(app_classes)
                    .add_properties(registration.get_init_parameters())
                    .add_properties(self.context.get_context_params())
                )

                if registration.class_name is not None:
                    # Declared implementation only needs its config
                    self.store(resource_config, self.context, registration.name)
                else:
                    container = self.container_factory(resource_config)
                    registration = directory.add_servlet(registration.name, container)
                    registration.set_load_on_startup(self.defaults.load_on_startup)

                    if not registration.mappings:
                        logger.warning(
                            f"Application {registration.name} has no servlet mapping"
                        )
                    else:
                        logger.info(
                            f"Registered {registration.name} with classes "
                            f"{[c.name for c in app_classes]}"
                        )
                configured.append(registration.name)

        default_name = registration.name if registration is not None else None

        for servlet in directory.list_servlet_registrations().values():
            if (
                servlet.is_container
                and servlet.name != default_name
                and servlet.name not in claimed
                and not servlet.init_parameters
            ):
                resource_config = (
                    ResourceConfig.for_default_application(app_classes)
                    .add_properties(self.context.get_context_params())
                )
                self.store(resource_config, self.context, servlet.name)
                logger.debug(f"Stored default configuration for {servlet.name}")
                configured.append(servlet.name)

        return configured


__all__ = ["DefaultApplicationFallback"]
