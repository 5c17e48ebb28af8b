# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Reserved names and enums shared with the host
# PURPOSE: Wire contract between deployment descriptors and the initializer
# EXPORTS: RegistrationKind, AnnotationType, reserved name constants
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the container initializer.

These names are the contract with the host's static deployment descriptor:
- DEFAULT_APPLICATION_NAME names the registration that serves every
  discovered resource when no custom Application subclass governs it
- APPLICATION_CLASS_PARAM is the init parameter that binds a registration
  to an Application subclass by name
- CONTAINER_CLASS_NAMES identify registrations implemented by our container
"""

from enum import Enum
from typing import FrozenSet


# ============================================================================
# ENUMS
# ============================================================================

class RegistrationKind(str, Enum):
    """Kinds of named registrations held by the host."""
    SERVLET = "servlet"
    FILTER = "filter"


class AnnotationType(str, Enum):
    """Markers a discovered type can carry."""
    PATH = "path"                  # Root resource
    PROVIDER = "provider"          # Extension provider


# ============================================================================
# RESERVED NAMES
# ============================================================================

# Fully-qualified name of core.application.Application
DEFAULT_APPLICATION_NAME = "core.application.Application"

# Init parameter naming the governing Application subclass
APPLICATION_CLASS_PARAM = "rest.application"

CONTAINER_CLASS_NAME = "initializer.container.ApplicationContainer"
LEGACY_CONTAINER_CLASS_NAME = "initializer.portability.PortableApplicationContainer"

CONTAINER_CLASS_NAMES: FrozenSet[str] = frozenset({
    CONTAINER_CLASS_NAME,
    LEGACY_CONTAINER_CLASS_NAME,
})

# Host attribute key prefix used by the resource config side channel
RESOURCE_CONFIG_ATTRIBUTE_PREFIX = "rest.servlet.internal.resourceConfig_"


def is_container_class(class_name: str) -> bool:
    """Check if class_name is one of our container implementations."""
    return class_name in CONTAINER_CLASS_NAMES


__all__ = [
    "RegistrationKind",
    "AnnotationType",
    "DEFAULT_APPLICATION_NAME",
    "APPLICATION_CLASS_PARAM",
    "CONTAINER_CLASS_NAME",
    "LEGACY_CONTAINER_CLASS_NAME",
    "CONTAINER_CLASS_NAMES",
    "RESOURCE_CONFIG_ATTRIBUTE_PREFIX",
    "is_container_class",
]
