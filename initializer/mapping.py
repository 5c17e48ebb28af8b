# ============================================================================
# MAPPING PATHS
# ============================================================================
# STATUS: Initializer - URL mapping normalization
# PURPOSE: Turn @application_path values into /prefix/* patterns
# ============================================================================
"""
Mapping Paths

    create_mapping_path("shop")     -> "/shop/*"
    create_mapping_path("/shop/")   -> "/shop/*"
    create_mapping_path("/shop/*")  -> "/shop/*"
    create_mapping_path("/")        -> "/*"
"""

from host.directory import RegistrationDirectory


def create_mapping_path(path: str) -> str:
    """Normalize an application path into a prefix mapping pattern."""
    if not path.startswith("/"):
        path = "/" + path

    if not path.endswith("/*"):
        if path.endswith("/"):
            path += "*"
        else:
            path += "/*"

    return path


def mapping_exists(directory: RegistrationDirectory, mapping: str) -> bool:
    """Check if any servlet registration already declares ``mapping``."""
    for registration in directory.list_servlet_registrations().values():
        if mapping in registration.mappings:
            return True
    return False


def is_prefix_mapping(mapping: str) -> bool:
    """True for "/prefix/*" and "/*"; extension and exact patterns are not."""
    return mapping.startswith("/") and mapping.endswith("/*")


def mapping_prefix(mapping: str) -> str:
    """Mount prefix for a pattern: "/shop/*" -> "/shop", "/*" -> ""."""
    if mapping.endswith("/*"):
        mapping = mapping[:-2]
    return mapping.rstrip("/")


__all__ = [
    "create_mapping_path",
    "mapping_exists",
    "is_prefix_mapping",
    "mapping_prefix",
]
