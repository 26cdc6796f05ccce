"""Core data models describing a hub contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True)
class PrimitiveType:
    """Built-in type of the target runtime (``string``, ``int``, ``Guid`` ...)."""

    name: str
    namespace: Optional[str] = None


@dataclass(frozen=True)
class ArrayType:
    """Single-dimension array of ``element``."""

    element: "TypeDescriptor"

    @property
    def name(self) -> str:
        return f"{self.element.name}[]"


@dataclass(eq=False)
class ClassType:
    """User-defined class or interface with ordered properties.

    Properties may point back at the class itself, so instances compare by
    identity; use :func:`shape_of` for structural comparison.
    """

    name: str
    properties: List[Tuple[str, "TypeDescriptor"]] = field(default_factory=list)
    is_interface: bool = False


@dataclass(frozen=True)
class EnumType:
    """Enumeration whose members are listed in ordinal order."""

    name: str
    members: Tuple[str, ...] = ()


@dataclass(frozen=True)
class GenericType:
    """Parameterized type; never representable in generated output."""

    name: str
    arguments: Tuple["TypeDescriptor", ...] = ()


TypeDescriptor = Union[PrimitiveType, ArrayType, ClassType, EnumType, GenericType]

# Parameter type the host framework injects into client API callbacks.
CONNECTION_CONTEXT = PrimitiveType("IClientProxy", "Microsoft.AspNetCore.SignalR")


class Direction(str, Enum):
    SERVER_RECEIVED = "server_received"
    CLIENT_INVOKED = "client_invoked"


class ContractRole(str, Enum):
    HUB = "hub"
    CLIENT_API = "client_api"
    OTHER = "other"


@dataclass(frozen=True)
class OperationDescriptor:
    """One contract operation as produced by introspection."""

    name: str
    direction: Direction
    parameters: Tuple[Tuple[str, TypeDescriptor], ...] = ()
    async_void: bool = True
    returns: Optional[str] = None


@dataclass(frozen=True)
class ContractType:
    """Introspected type from the contract source."""

    name: str
    role: ContractRole
    operations: Tuple[OperationDescriptor, ...] = ()


@dataclass(frozen=True)
class ContractMetadata:
    """Read-only structural description of a whole contract module."""

    source: str
    types: Tuple[ContractType, ...] = ()

    def of_role(self, role: ContractRole) -> List[ContractType]:
        return [item for item in self.types if item.role is role]


def shape_of(descriptor: TypeDescriptor) -> tuple:
    """Return a shallow structural key used to detect shadow redeclarations."""
    if isinstance(descriptor, ClassType):
        members = tuple((name, _type_label(kind)) for name, kind in descriptor.properties)
        return ("interface" if descriptor.is_interface else "class", descriptor.name, members)
    if isinstance(descriptor, EnumType):
        return ("enum", descriptor.name, descriptor.members)
    return ("ref", _type_label(descriptor))


def _type_label(descriptor: TypeDescriptor) -> str:
    if isinstance(descriptor, GenericType):
        inner = ", ".join(_type_label(arg) for arg in descriptor.arguments)
        return f"{descriptor.name}<{inner}>"
    return descriptor.name


__all__ = [
    "ArrayType",
    "CONNECTION_CONTEXT",
    "ClassType",
    "ContractMetadata",
    "ContractRole",
    "ContractType",
    "Direction",
    "EnumType",
    "GenericType",
    "OperationDescriptor",
    "PrimitiveType",
    "TypeDescriptor",
    "shape_of",
]
