# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for container registration and logging
# ============================================================================
"""
Configuration Defaults

Defaults applied when the initializer registers containers.
These can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Reserved wire-contract names are NOT configurable (see core.contracts)
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class InitializerDefaults:
    """
    Defaults for dynamically registered containers.

    Controls eager initialization, async dispatch and provider discovery.
    """
    # Dynamic registration flags
    load_on_startup: int = 1
    async_supported: bool = True

    # Entry point group scanned for container providers
    provider_group: str = "rest_initializer.container_providers"

    # Logging
    log_level: str = "INFO"
    log_format: str = "human"

    @property
    def json_logging(self) -> bool:
        return self.log_format.lower() == "json"

    @classmethod
    def from_env(cls) -> "InitializerDefaults":
        """Create from environment variables."""
        return cls(
            load_on_startup=int(os.getenv("CONTAINER_LOAD_ON_STARTUP", 1)),
            async_supported=_env_bool("CONTAINER_ASYNC_SUPPORTED", True),
            provider_group=os.getenv(
                "CONTAINER_PROVIDER_GROUP", "rest_initializer.container_providers"
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "human"),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

_defaults: Optional[InitializerDefaults] = None


def get_defaults() -> InitializerDefaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = InitializerDefaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "InitializerDefaults",
    "get_defaults",
    "reset_defaults",
]
