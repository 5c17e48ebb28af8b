# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the container initializer.
"""

from core.config.defaults import (
    InitializerDefaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "InitializerDefaults",
    "get_defaults",
    "reset_defaults",
]
