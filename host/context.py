# ============================================================================
# HOST CONTEXT
# ============================================================================
# STATUS: Host - Per-deployment context and config side channel
# PURPOSE: Context parameters, attributes, and resource config storage
# ============================================================================
"""
Host Context

One HostContext exists per deployment. It owns:
- the registration directory
- the global context parameters (merged into every resource config)
- an attribute map, used as the side channel that hands a ResourceConfig to
  a container whose class was declared statically

The initializer only calls store_resource_config(); the host reads the
config back when it instantiates the declared container.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from core.contracts import RESOURCE_CONFIG_ATTRIBUTE_PREFIX
from core.models import ResourceConfig
from host.directory import InMemoryRegistrationDirectory, RegistrationDirectory

logger = logging.getLogger(__name__)


@dataclass
class HostContext:
    """Deployment-wide state shared between the host and the initializer."""
    directory: RegistrationDirectory = field(default_factory=InMemoryRegistrationDirectory)
    init_parameters: Dict[str, str] = field(default_factory=dict)
    attributes: Dict[str, Any] = field(default_factory=dict)
    name: str = "default"

    def get_context_params(self) -> Dict[str, str]:
        """Copy of the global context parameters."""
        return dict(self.init_parameters)

    def set_attribute(self, key: str, value: Any) -> None:
        self.attributes[key] = value

    def get_attribute(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)


def _attribute_key(registration_name: str) -> str:
    return f"{RESOURCE_CONFIG_ATTRIBUTE_PREFIX}{registration_name}"


def store_resource_config(
    resource_config: ResourceConfig,
    context: HostContext,
    registration_name: str,
) -> None:
    """
    Store a config for a statically declared container.

    A later store under the same name replaces the earlier one.
    """
    key = _attribute_key(registration_name)
    if key in context.attributes:
        logger.debug(f"Replacing stored resource config for {registration_name}")
    context.set_attribute(key, resource_config)


def get_stored_resource_config(
    context: HostContext,
    registration_name: str,
) -> Optional[ResourceConfig]:
    """Config stored for ``registration_name``, or None."""
    return context.get_attribute(_attribute_key(registration_name))


__all__ = [
    "HostContext",
    "store_resource_config",
    "get_stored_resource_config",
]
