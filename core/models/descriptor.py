# ============================================================================
# TYPE DESCRIPTOR MODEL
# ============================================================================
# STATUS: Core model - Discovered type metadata
# PURPOSE: Describe a discovered class without loading it again
# EXPORTS: TypeDescriptor, describe, describe_all
# DEPENDENCIES: dataclasses
# ============================================================================
"""
Type Descriptor Model

A TypeDescriptor is what class discovery hands to the initializer: the
fully-qualified name, the markers carried by the class itself, the
application path (if declared) and the names of every supertype.

Application-subclass testing is a lookup in ``supertypes``, not a live
``issubclass`` call, so descriptors can come from any scanner.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Tuple

from core.application import (
    Application,
    APPLICATION_PATH_ATTRIBUTE,
    PATH_ATTRIBUTE,
    PROVIDER_ATTRIBUTE,
    qualified_name,
)
from core.contracts import AnnotationType, DEFAULT_APPLICATION_NAME


@dataclass(frozen=True)
class TypeDescriptor:
    """
    Immutable description of one discovered type.

    Attributes:
        name: Fully-qualified name (module + qualname)
        supertypes: Fully-qualified names of all supertypes
        annotations: Markers present on the type itself
        application_path: Value of @application_path, if any
        resource_path: Value of @path, if any
        declared_classes: Classes an Application subclass publishes itself
        type_: The live class, when the descriptor was built from one
    """
    name: str
    supertypes: FrozenSet[str] = frozenset()
    annotations: FrozenSet[AnnotationType] = frozenset()
    application_path: Optional[str] = None
    resource_path: Optional[str] = None
    declared_classes: Tuple["TypeDescriptor", ...] = ()
    type_: Optional[type] = field(default=None, compare=False, repr=False)

    @property
    def is_application_subclass(self) -> bool:
        """Strict subtype of the Application base type."""
        return (
            self.name != DEFAULT_APPLICATION_NAME
            and DEFAULT_APPLICATION_NAME in self.supertypes
        )

    @property
    def is_root_resource(self) -> bool:
        return AnnotationType.PATH in self.annotations

    @property
    def is_provider(self) -> bool:
        return AnnotationType.PROVIDER in self.annotations

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    def __str__(self) -> str:
        return self.name


def describe(cls: type) -> TypeDescriptor:
    """
    Build a descriptor from a live class.

    Only markers set on ``cls`` itself are recorded.
    """
    own = vars(cls)

    annotations = set()
    if PATH_ATTRIBUTE in own:
        annotations.add(AnnotationType.PATH)
    if own.get(PROVIDER_ATTRIBUTE):
        annotations.add(AnnotationType.PROVIDER)

    supertypes = frozenset(
        qualified_name(base) for base in cls.__mro__[1:] if base is not object
    )

    declared: Tuple[TypeDescriptor, ...] = ()
    if issubclass(cls, Application):
        declared = tuple(describe(c) for c in cls.classes)

    return TypeDescriptor(
        name=qualified_name(cls),
        supertypes=supertypes,
        annotations=frozenset(annotations),
        application_path=own.get(APPLICATION_PATH_ATTRIBUTE),
        resource_path=own.get(PATH_ATTRIBUTE),
        declared_classes=declared,
        type_=cls,
    )


def describe_all(classes: Iterable[type]) -> Tuple[TypeDescriptor, ...]:
    """Describe classes, preserving order."""
    return tuple(describe(cls) for cls in classes)


__all__ = [
    "TypeDescriptor",
    "describe",
    "describe_all",
]
