# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export contracts, models and application markers
# ============================================================================

from core.contracts import (
    RegistrationKind,
    AnnotationType,
    DEFAULT_APPLICATION_NAME,
    APPLICATION_CLASS_PARAM,
    CONTAINER_CLASS_NAMES,
)
from core.application import Application, path, provider, application_path
from core.models import (
    TypeDescriptor,
    Registration,
    ResourceConfig,
    describe,
    describe_all,
)

__all__ = [
    # Enums & constants
    "RegistrationKind",
    "AnnotationType",
    "DEFAULT_APPLICATION_NAME",
    "APPLICATION_CLASS_PARAM",
    "CONTAINER_CLASS_NAMES",
    # Declarations
    "Application",
    "path",
    "provider",
    "application_path",
    # Models
    "TypeDescriptor",
    "Registration",
    "ResourceConfig",
    "describe",
    "describe_all",
]
