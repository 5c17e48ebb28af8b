# ============================================================================
# RESOLUTION ENGINE
# ============================================================================
# STATUS: Initializer - Application to registration resolution
# PURPOSE: Decide which registrations get created, completed and mapped
# ============================================================================
"""
Resolution Engine

For every discovered Application subclass, in discovery order:

1. A servlet registration named after the application exists
   -> enhance it.
2. Registrations name the application in their APPLICATION_CLASS_PARAM
   init parameter -> enhance every servlet among them (filters are
   inspected but never completed).
3. Nothing references the application -> register a new container,
   provided the application declares an @application_path. Without one the
   application is left unregistered; the deployment descriptor is expected
   to declare it.

Afterwards the default application fallback runs over the registrations no
application claimed.

Config property precedence (later wins):
    registration init parameters < host context parameters

Error policy:
- Mapping conflicts and missing mappings are logged and resolution continues
- RegistrationError from the host directory propagates
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Set

from core.config import InitializerDefaults, get_defaults
from core.contracts import APPLICATION_CLASS_PARAM
from core.logging import get_logger, log_context
from core.models import Registration, ResourceConfig, TypeDescriptor
from host.context import HostContext, store_resource_config
from initializer.classifier import (
    get_application_classes,
    get_root_resource_and_provider_classes,
)
from initializer.container import ApplicationContainer
from initializer.fallback import DefaultApplicationFallback
from initializer.mapping import create_mapping_path, mapping_exists

logger = get_logger(__name__)


# ============================================================================
# RESULT
# ============================================================================

@dataclass
class ResolutionResult:
    """
    Outcome of one resolution pass.

    ``claimed`` holds the names of registrations bound to an Application
    subclass; the fallback skips them.
    """
    claimed: Set[str] = field(default_factory=set)
    mappings: Dict[str, str] = field(default_factory=dict)
    conflicts: List[str] = field(default_factory=list)
    unmapped: List[str] = field(default_factory=list)
    unregistered: List[str] = field(default_factory=list)
    defaults: List[str] = field(default_factory=list)


# ============================================================================
# ENGINE
# ============================================================================

class ResolutionEngine:
    """Resolves discovered applications against the host's registrations."""

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

    @property
    def directory(self):
        return self.context.directory

    def resolve(self, classes: Iterable[TypeDescriptor]) -> ResolutionResult:
        """
        Run the full resolution pass.

        Args:
            classes: Discovered type descriptors (may be empty)

        Returns:
            ResolutionResult

        Raises:
            RegistrationError: If the host rejects a registration or mapping
        """
        classes = list(classes)
        app_classes = get_root_resource_and_provider_classes(classes)
        result = ResolutionResult()

        for application in get_application_classes(classes):
            with log_context(application=application.name):
                self._resolve_application(application, app_classes, result)

        fallback = DefaultApplicationFallback(
            self.context,
            defaults=self.defaults,
            container_factory=self.container_factory,
            store=self.store,
        )
        result.defaults = fallback.apply(app_classes, result.claimed)
        return result

    def _resolve_application(
        self,
        application: TypeDescriptor,
        app_classes: Sequence[TypeDescriptor],
        result: ResolutionResult,
    ) -> None:
        registration = self.directory.get_servlet_registration(application.name)

        if registration is not None:
            self._add_with_existing_registration(registration, application, app_classes, result)
            result.claimed.add(registration.name)
            return

        # Not registered under the application's name; look for registrations
        # naming it in their init parameters
        declared = self._get_init_param_declared_registrations(application)
        if declared:
            for registration in declared:
                if registration.is_servlet:
                    self._add_with_existing_registration(
                        registration, application, app_classes, result
                    )
                    result.claimed.add(registration.name)
            return

        registration = self._add_with_application(application, app_classes, result)
        if registration is not None:
            result.claimed.add(registration.name)
        else:
            result.unregistered.append(application.name)
            logger.debug(f"No registration produced for {application.name}")

    def _get_init_param_declared_registrations(
        self,
        application: TypeDescriptor,
    ) -> List[Registration]:
        registrations: List[Registration] = []
        for group in (
            self.directory.list_servlet_registrations(),
            self.directory.list_filter_registrations(),
        ):
            for registration in group.values():
                if registration.init_parameters.get(APPLICATION_CLASS_PARAM) == application.name:
                    registrations.append(registration)
        return registrations

    def _add_with_application(
        self,
        application: TypeDescriptor,
        app_classes: Sequence[TypeDescriptor],
        result: ResolutionResult,
    ) -> Optional[Registration]:
        """Register a new container for an unclaimed, annotated application."""
        if application.application_path is None:
            return None

        resource_config = (
            ResourceConfig.for_application_class(application, app_classes)
            .add_properties(self.context.get_context_params())
        )
        container = self.container_factory(resource_config)
        registration = self.directory.add_servlet(application.name, container)
        registration.set_async_supported(self.defaults.async_supported)
        registration.set_load_on_startup(self.defaults.load_on_startup)

        mapping = create_mapping_path(application.application_path)
        self._add_mapping(registration, application, mapping, result)
        return registration

    def _add_with_existing_registration(
        self,
        registration: Registration,
        application: TypeDescriptor,
        app_classes: Sequence[TypeDescriptor],
        result: ResolutionResult,
    ) -> None:
        """Complete and map a registration that already exists."""
        with log_context(registration=registration.name):
            resource_config = (
                ResourceConfig.for_application_class(application, app_classes)
                .add_properties(registration.get_init_parameters())
                .add_properties(self.context.get_context_params())
            )

            if registration.class_name is not None:
                # Declared implementation only needs its config
                self.store(resource_config, self.context, registration.name)
            else:
                container = self.container_factory(resource_config)
                registration = self.directory.add_servlet(application.name, container)
                registration.set_async_supported(self.defaults.async_supported)
                registration.set_load_on_startup(self.defaults.load_on_startup)

            if registration.mappings:
                logger.info(f"Registered application {application.name}")
                return

            if application.application_path is None:
                logger.warning(
                    f"Application {application.name} has no servlet mapping "
                    f"and no @application_path"
                )
                result.unmapped.append(application.name)
                return

            mapping = create_mapping_path(application.application_path)
            self._add_mapping(registration, application, mapping, result)

    def _add_mapping(
        self,
        registration: Registration,
        application: TypeDescriptor,
        mapping: str,
        result: ResolutionResult,
    ) -> None:
        if mapping_exists(self.directory, mapping):
            logger.warning(
                f"Mapping {mapping} for {application.name} conflicts with an "
                f"existing mapping; not added"
            )
            result.conflicts.append(mapping)
            return

        self.directory.add_mapping(registration, mapping)
        result.mappings[application.name] = mapping
        logger.info(f"Registered {application.name} at {mapping}")


__all__ = [
    "ResolutionEngine",
    "ResolutionResult",
]
