# ============================================================================
# REGISTRATION DIRECTORY
# ============================================================================
# STATUS: Host - Servlet/filter registration lookup and mutation
# PURPOSE: The host-side view the initializer reads and completes
# ============================================================================
"""
Registration Directory

The initializer never owns registrations; it reads and mutates them through
this interface only.

Design:
- Registrations are keyed by name within their kind (servlet or filter)
- add_servlet() creates a dynamic registration, or completes a declared
  registration of the same name that has no implementation yet
- Fail-fast: binding a name already implemented by something else raises
- Mappings only grow; a pattern owned by another servlet is rejected
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional

from core.contracts import RegistrationKind
from core.models import Registration

logger = logging.getLogger(__name__)


# ============================================================================
# EXCEPTIONS
# ============================================================================

class RegistrationError(Exception):
    """Base exception for host registration failures."""
    pass


class DuplicateRegistrationError(RegistrationError):
    """Raised when a name is already bound to a different implementation."""
    def __init__(self, name: str, class_name: Optional[str]):
        self.name = name
        self.class_name = class_name
        super().__init__(f"Registration already bound: {name} ({class_name})")


class MappingConflictError(RegistrationError):
    """Raised when a pattern is already mapped to another registration."""
    def __init__(self, pattern: str, owner: str):
        self.pattern = pattern
        self.owner = owner
        super().__init__(f"Mapping {pattern} already owned by {owner}")


# ============================================================================
# INTERFACE
# ============================================================================

class RegistrationDirectory(ABC):
    """Host interface over named servlet and filter registrations."""

    @abstractmethod
    def list_servlet_registrations(self) -> Dict[str, Registration]:
        """Servlet registrations by name."""

    @abstractmethod
    def list_filter_registrations(self) -> Dict[str, Registration]:
        """Filter registrations by name."""

    @abstractmethod
    def get_servlet_registration(self, name: str) -> Optional[Registration]:
        """Servlet registration with exactly this name, or None."""

    @abstractmethod
    def add_servlet(self, name: str, instance: Any) -> Registration:
        """
        Register ``instance`` as servlet ``name``.

        Raises:
            RegistrationError: If the host rejects the registration
        """

    @abstractmethod
    def add_mapping(self, registration: Registration, pattern: str) -> bool:
        """
        Map ``pattern`` to ``registration``.

        Returns:
            True if added, False if the registration already declared it

        Raises:
            RegistrationError: If the host rejects the mapping
        """


# ============================================================================
# IN-MEMORY IMPLEMENTATION
# ============================================================================

class InMemoryRegistrationDirectory(RegistrationDirectory):
    """
    Directory backed by plain dicts.

    Used by the bundled ASGI host and by tests.
    """

    def __init__(
        self,
        servlets: Optional[Iterable[Registration]] = None,
        filters: Optional[Iterable[Registration]] = None,
    ):
        self._servlets: Dict[str, Registration] = {}
        self._filters: Dict[str, Registration] = {}
        for registration in servlets or ():
            self.declare(registration)
        for registration in filters or ():
            self.declare(registration)

    def declare(self, registration: Registration) -> Registration:
        """
        Add a statically declared registration.

        Raises:
            DuplicateRegistrationError: If the name is already declared
        """
        target = self._servlets if registration.is_servlet else self._filters
        if registration.name in target:
            raise DuplicateRegistrationError(
                registration.name, target[registration.name].class_name
            )
        target[registration.name] = registration
        logger.debug(f"Declared {registration.kind.value}: {registration.name}")
        return registration

    def list_servlet_registrations(self) -> Dict[str, Registration]:
        return dict(self._servlets)

    def list_filter_registrations(self) -> Dict[str, Registration]:
        return dict(self._filters)

    def get_servlet_registration(self, name: str) -> Optional[Registration]:
        return self._servlets.get(name)

    def add_servlet(self, name: str, instance: Any) -> Registration:
        class_name = f"{type(instance).__module__}.{type(instance).__qualname__}"

        registration = self._servlets.get(name)
        if registration is not None:
            if registration.class_name is not None or registration.instance is not None:
                raise DuplicateRegistrationError(name, registration.class_name)
            # Complete a declared registration in place
            registration.class_name = class_name
            registration.instance = instance
            registration.dynamic = True
            logger.debug(f"Completed servlet: {name} ({class_name})")
            return registration

        registration = Registration(
            name=name,
            kind=RegistrationKind.SERVLET,
            class_name=class_name,
            instance=instance,
            dynamic=True,
        )
        self._servlets[name] = registration
        logger.debug(f"Added servlet: {name} ({class_name})")
        return registration

    def add_mapping(self, registration: Registration, pattern: str) -> bool:
        for other in self._servlets.values():
            if other.name != registration.name and pattern in other.mappings:
                raise MappingConflictError(pattern, other.name)

        if pattern in registration.mappings:
            return False
        registration.mappings.append(pattern)
        logger.debug(f"Mapped {pattern} -> {registration.name}")
        return True

    def __len__(self) -> int:
        return len(self._servlets) + len(self._filters)

    def __contains__(self, name: str) -> bool:
        return name in self._servlets


__all__ = [
    "RegistrationDirectory",
    "InMemoryRegistrationDirectory",
    "RegistrationError",
    "DuplicateRegistrationError",
    "MappingConflictError",
]
