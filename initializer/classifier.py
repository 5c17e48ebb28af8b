# ============================================================================
# APPLICATION CLASSIFIER
# ============================================================================
# STATUS: Initializer - Partition discovered types
# PURPOSE: Find Application subclasses and root resources/providers
# ============================================================================
"""
Application Classifier

Both functions keep the order in which types were discovered and drop
repeated names. The two results may overlap: an Application subclass that
is also marked @provider appears in both.
"""

from typing import Iterable, List

from core.models import TypeDescriptor


def _unique(classes: Iterable[TypeDescriptor]) -> List[TypeDescriptor]:
    seen = set()
    result = []
    for descriptor in classes:
        if descriptor.name not in seen:
            seen.add(descriptor.name)
            result.append(descriptor)
    return result


def get_application_classes(classes: Iterable[TypeDescriptor]) -> List[TypeDescriptor]:
    """Application subclasses, excluding the Application base type itself."""
    return _unique(c for c in classes if c.is_application_subclass)


def get_root_resource_and_provider_classes(
    classes: Iterable[TypeDescriptor],
) -> List[TypeDescriptor]:
    """Types marked @path or @provider."""
    return _unique(c for c in classes if c.is_root_resource or c.is_provider)


__all__ = [
    "get_application_classes",
    "get_root_resource_and_provider_classes",
]
