# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for initializer models
# ============================================================================
"""
Models Module - Central Export Point

- TypeDescriptor: what discovery hands to the initializer
- Registration: host-owned servlet/filter record (pydantic)
- ResourceConfig: per-application configuration built by the initializer
"""

from core.models.descriptor import TypeDescriptor, describe, describe_all
from core.models.registration import Registration
from core.models.resource_config import ResourceConfig

__all__ = [
    # Discovery
    "TypeDescriptor",
    "describe",
    "describe_all",
    # Host
    "Registration",
    # Configuration
    "ResourceConfig",
]
