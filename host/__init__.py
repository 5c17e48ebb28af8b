# ============================================================================
# HOST MODULE
# ============================================================================
# STATUS: Host - Package exports
# PURPOSE: Registration directory, host context and deployment descriptors
# ============================================================================
"""
Host

The environment the initializer runs in. The ASGI host lives in
``host.asgi`` and is imported explicitly.
"""

from host.directory import (
    RegistrationDirectory,
    InMemoryRegistrationDirectory,
    RegistrationError,
    DuplicateRegistrationError,
    MappingConflictError,
)
from host.context import HostContext, store_resource_config, get_stored_resource_config
from host.descriptor import DescriptorError, DeploymentDescriptor, load_descriptor

__all__ = [
    "RegistrationDirectory",
    "InMemoryRegistrationDirectory",
    "RegistrationError",
    "DuplicateRegistrationError",
    "MappingConflictError",
    "HostContext",
    "store_resource_config",
    "get_stored_resource_config",
    "DescriptorError",
    "DeploymentDescriptor",
    "load_descriptor",
]
