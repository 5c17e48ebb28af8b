# ============================================================================
# REGISTRATION MODEL
# ============================================================================
# STATUS: Core model - Host-owned servlet/filter registration
# PURPOSE: One named handler declared to the host
# EXPORTS: Registration
# DEPENDENCIES: pydantic
# ============================================================================
"""
Registration Model

A Registration is the host's record of one named servlet or filter.

Key concept:
- Declared registrations come from the static deployment descriptor and may
  be partial (a name with no class, or a class with no mapping)
- Dynamic registrations are created or completed by the initializer

Lifecycle:
    1. Created by the host (descriptor) or by add_servlet (dynamic)
    2. Optionally completed: class_name and instance bound
    3. Mappings may be added; they are never removed
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from core.contracts import RegistrationKind, is_container_class


class Registration(BaseModel):
    """
    Mutable record of a named servlet or filter.

    ``name`` is the key within its kind and never changes.
    """

    name: str = Field(..., min_length=1, description="Unique within its kind")
    kind: RegistrationKind = Field(default=RegistrationKind.SERVLET)

    # Implementation (None or blank = declared but not yet bound)
    class_name: Optional[str] = Field(default=None)
    instance: Optional[Any] = Field(default=None, exclude=True)

    mappings: List[str] = Field(default_factory=list)
    init_parameters: Dict[str, str] = Field(default_factory=dict)

    # Dynamic registration flags
    dynamic: bool = Field(default=False)
    async_supported: bool = Field(default=False)
    load_on_startup: Optional[int] = Field(default=None)

    model_config = {"frozen": False}

    @field_validator("class_name", mode="before")
    @classmethod
    def blank_class_name_is_unbound(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_servlet(self) -> bool:
        return self.kind == RegistrationKind.SERVLET

    @property
    def is_container(self) -> bool:
        """Check if implemented by one of our container classes."""
        return is_container_class(self.class_name)

    def set_async_supported(self, supported: bool) -> None:
        self.async_supported = supported

    def set_load_on_startup(self, priority: int) -> None:
        self.load_on_startup = priority

    def get_init_parameters(self) -> Dict[str, str]:
        """Copy of the init parameters."""
        return dict(self.init_parameters)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for inspection endpoints and logs."""
        return self.model_dump(mode="json")
