# ============================================================================
# RESOURCE CONFIG MODEL
# ============================================================================
# STATUS: Core model - Per-application configuration
# PURPOSE: Classes and merged properties handed to one container
# EXPORTS: ResourceConfig
# DEPENDENCIES: dataclasses
# ============================================================================
"""
Resource Config Model

Built fresh for every resolved application. Properties are merged with
add_properties() before the config is handed to a container or stored;
a later merge overwrites keys from an earlier one.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from core.contracts import DEFAULT_APPLICATION_NAME
from core.models.descriptor import TypeDescriptor


@dataclass
class ResourceConfig:
    """
    Configuration for one deployed application.

    ``application`` is None for the default application.
    """
    application: Optional[TypeDescriptor] = None
    default_classes: Tuple[TypeDescriptor, ...] = ()
    properties: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_application_class(
        cls,
        application: TypeDescriptor,
        default_classes: Iterable[TypeDescriptor],
    ) -> "ResourceConfig":
        """Config scoped to an Application subclass."""
        return cls(application=application, default_classes=tuple(default_classes))

    @classmethod
    def for_default_application(
        cls,
        default_classes: Iterable[TypeDescriptor],
    ) -> "ResourceConfig":
        """Config for the catch-all default application."""
        return cls(application=None, default_classes=tuple(default_classes))

    def add_properties(self, properties: Mapping[str, Any]) -> "ResourceConfig":
        """Merge properties (same keys overwritten) and return self."""
        self.properties.update(properties)
        return self

    def get_property(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)

    @property
    def application_name(self) -> str:
        if self.application is None:
            return DEFAULT_APPLICATION_NAME
        return self.application.name

    @property
    def classes(self) -> Tuple[TypeDescriptor, ...]:
        """
        Classes published by this application.

        An application that declares its own classes publishes only those;
        otherwise every default class is published.
        """
        if self.application is not None and self.application.declared_classes:
            return self.application.declared_classes
        return self.default_classes


__all__ = ["ResourceConfig"]
