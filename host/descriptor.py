# ============================================================================
# DEPLOYMENT DESCRIPTOR
# ============================================================================
# STATUS: Host - Static registration declarations
# PURPOSE: Load servlet/filter declarations from YAML into a HostContext
# ============================================================================
"""
Deployment Descriptor

Static declarations the host registers before the initializer runs:

    context_params:
      shop.currency: EUR
    servlets:
      - name: shop.ShopApplication          # name only: initializer binds it
      - name: admin
        class_name: initializer.container.ApplicationContainer
        init_params:
          rest.application: admin.AdminApplication
        mappings: ["/admin/*"]
    filters:
      - name: audit
        class_name: audit.AuditFilter

Any servlet may omit class_name, init_params or mappings.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from core.contracts import RegistrationKind
from core.models import Registration
from host.context import HostContext
from host.directory import InMemoryRegistrationDirectory

logger = logging.getLogger(__name__)


class DescriptorError(Exception):
    """Raised when a deployment descriptor cannot be loaded."""
    pass


class RegistrationDeclaration(BaseModel):
    """One servlet or filter declaration."""
    name: str = Field(..., min_length=1)
    class_name: Optional[str] = None
    init_params: Dict[str, str] = Field(default_factory=dict)
    mappings: List[str] = Field(default_factory=list)

    def to_registration(self, kind: RegistrationKind) -> Registration:
        return Registration(
            name=self.name,
            kind=kind,
            class_name=self.class_name,
            init_parameters=dict(self.init_params),
            mappings=list(self.mappings),
        )


class DeploymentDescriptor(BaseModel):
    """Top-level descriptor document."""
    name: str = "default"
    context_params: Dict[str, str] = Field(default_factory=dict)
    servlets: List[RegistrationDeclaration] = Field(default_factory=list)
    filters: List[RegistrationDeclaration] = Field(default_factory=list)

    def build_context(self) -> HostContext:
        """Create a HostContext holding these declarations."""
        directory = InMemoryRegistrationDirectory(
            servlets=[s.to_registration(RegistrationKind.SERVLET) for s in self.servlets],
            filters=[f.to_registration(RegistrationKind.FILTER) for f in self.filters],
        )
        return HostContext(
            directory=directory,
            init_parameters=dict(self.context_params),
            name=self.name,
        )


def parse_descriptor(data: Optional[Dict[str, Any]]) -> DeploymentDescriptor:
    """Validate a descriptor mapping (an empty document is allowed)."""
    try:
        return DeploymentDescriptor.model_validate(data or {})
    except ValidationError as e:
        raise DescriptorError(f"Invalid deployment descriptor: {e}") from e


def load_descriptor(path: Union[str, Path]) -> HostContext:
    """
    Load a YAML deployment descriptor and build its HostContext.

    Raises:
        DescriptorError: If the file is missing, not YAML, or invalid
    """
    path = Path(path)
    if not path.exists():
        raise DescriptorError(f"Deployment descriptor not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DescriptorError(f"Cannot parse {path}: {e}") from e

    descriptor = parse_descriptor(data)
    logger.info(
        f"Loaded deployment descriptor {path} "
        f"({len(descriptor.servlets)} servlets, {len(descriptor.filters)} filters)"
    )
    return descriptor.build_context()


__all__ = [
    "DescriptorError",
    "RegistrationDeclaration",
    "DeploymentDescriptor",
    "parse_descriptor",
    "load_descriptor",
]
