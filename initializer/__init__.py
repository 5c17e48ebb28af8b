# ============================================================================
# INITIALIZER MODULE
# ============================================================================
# STATUS: Initializer - Package exports
# PURPOSE: Resolve discovered applications into container registrations
# ============================================================================
"""
Initializer

Usage:
    from initializer import ContainerInitializer

    result = ContainerInitializer().on_startup(classes, context)
"""

from initializer.classifier import (
    get_application_classes,
    get_root_resource_and_provider_classes,
)
from initializer.container import ApplicationContainer
from initializer.engine import ResolutionEngine, ResolutionResult
from initializer.fallback import DefaultApplicationFallback
from initializer.mapping import create_mapping_path, mapping_exists
from initializer.providers import (
    ContainerProvider,
    ContainerProviderRegistry,
    discover_container_providers,
)
from initializer.startup import ContainerInitializer, find_container_names

__all__ = [
    "get_application_classes",
    "get_root_resource_and_provider_classes",
    "ApplicationContainer",
    "ResolutionEngine",
    "ResolutionResult",
    "DefaultApplicationFallback",
    "create_mapping_path",
    "mapping_exists",
    "ContainerProvider",
    "ContainerProviderRegistry",
    "discover_container_providers",
    "ContainerInitializer",
    "find_container_names",
]
