"""Language-neutral code model consumed by the emitter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ..models import OperationDescriptor, TypeDescriptor


@dataclass(frozen=True)
class TypeReference:
    """Reference to a type by name, optionally generic or an array."""

    name: str
    arguments: Tuple["TypeReference", ...] = ()
    element: Optional["TypeReference"] = None

    @classmethod
    def array_of(cls, element: "TypeReference") -> "TypeReference":
        return cls(name=f"{element.name}[]", element=element)

    @property
    def is_array(self) -> bool:
        return self.element is not None


@dataclass(frozen=True)
class FieldDeclaration:
    name: str
    type: TypeReference
    visibility: str = "private"


@dataclass(frozen=True)
class PropertyDeclaration:
    """Public accessor pair delegating to a private backing field."""

    name: str
    type: TypeReference
    visibility: str
    field: FieldDeclaration
    has_get: bool = True
    has_set: bool = True


@dataclass(frozen=True)
class Parameter:
    name: str
    type: TypeReference


@dataclass(frozen=True)
class Literal:
    value: str


@dataclass(frozen=True)
class VariableRef:
    name: str


Expression = Union[Literal, VariableRef]


@dataclass(frozen=True)
class MethodCall:
    target: str
    method: str
    arguments: Tuple[Expression, ...] = ()
    type_arguments: Tuple[TypeReference, ...] = ()


@dataclass(frozen=True)
class CallStatement:
    """Single call statement; ``awaited`` and ``returns`` pick its form."""

    call: MethodCall
    awaited: bool = False
    returns: bool = False


@dataclass(frozen=True)
class MethodDeclaration:
    name: str
    parameters: Tuple[Parameter, ...]
    return_type: TypeReference
    visibility: str
    is_async: bool = False
    body: Tuple[CallStatement, ...] = ()


@dataclass(frozen=True)
class ClassDeclaration:
    name: str
    properties: Tuple[PropertyDeclaration, ...] = ()
    methods: Tuple[MethodDeclaration, ...] = ()
    is_partial: bool = False
    is_interface: bool = False
    visibility: str = "public"


@dataclass(frozen=True)
class EnumDeclaration:
    name: str
    members: Tuple[str, ...] = ()
    visibility: str = "public"


TypeDeclaration = Union[ClassDeclaration, EnumDeclaration]


@dataclass(frozen=True)
class ApiModel:
    """Complete code model for one generation run."""

    namespace: str
    class_name: str
    connection_property_name: str
    imports: Tuple[str, ...]
    operations: Tuple[OperationDescriptor, ...]
    proxy: ClassDeclaration
    declared_types: Tuple[TypeDescriptor, ...]
    declarations: Tuple[TypeDeclaration, ...]

    @property
    def methods(self) -> Tuple[MethodDeclaration, ...]:
        return self.proxy.methods

    def method(self, name: str) -> MethodDeclaration:
        for method in self.proxy.methods:
            if method.name == name:
                return method
        raise KeyError(name)


__all__ = [
    "ApiModel",
    "CallStatement",
    "ClassDeclaration",
    "EnumDeclaration",
    "Expression",
    "FieldDeclaration",
    "Literal",
    "MethodCall",
    "MethodDeclaration",
    "Parameter",
    "PropertyDeclaration",
    "TypeDeclaration",
    "TypeReference",
    "VariableRef",
]
