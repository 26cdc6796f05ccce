"""Convert type descriptors into code-model references and declarations."""

from __future__ import annotations

from ..errors import UnsupportedTypeKind
from ..logging import get_logger
from ..models import ArrayType, ClassType, EnumType, GenericType, PrimitiveType, TypeDescriptor
from .codemodel import ClassDeclaration, EnumDeclaration, TypeReference
from .properties import build_property
from .registry import DeclaredTypeRegistry

_LOGGER = get_logger("resolver")


class TypeResolver:
    """Resolves descriptors, synthesizing declarations for types not yet known.

    New declarations are appended to the registry after everything they
    depend on, so emission order is stable for identical inputs.
    """

    def __init__(self, property_visibility: str = "public") -> None:
        self.property_visibility = property_visibility

    def resolve(self, descriptor: TypeDescriptor, registry: DeclaredTypeRegistry) -> TypeReference:
        if isinstance(descriptor, PrimitiveType):
            registry.require_import(descriptor.namespace)
            return TypeReference(descriptor.name)
        if isinstance(descriptor, GenericType):
            raise UnsupportedTypeKind(
                _display_name(descriptor), "generic types are not supported"
            )
        if isinstance(descriptor, ArrayType):
            return self._resolve_array(descriptor, registry)
        if isinstance(descriptor, EnumType):
            return self._resolve_enum(descriptor, registry)
        if isinstance(descriptor, ClassType):
            return self._resolve_class(descriptor, registry)
        raise UnsupportedTypeKind(_display_name(descriptor))

    def _resolve_array(self, descriptor: ArrayType, registry: DeclaredTypeRegistry) -> TypeReference:
        element = self.resolve(descriptor.element, registry)
        reference = TypeReference.array_of(element)
        # Arrays of built-ins are built-ins themselves.
        if not _is_builtin(descriptor) and reference.name not in registry:
            registry.declare(descriptor)
        return reference

    def _resolve_enum(self, descriptor: EnumType, registry: DeclaredTypeRegistry) -> TypeReference:
        if descriptor.name in registry:
            registry.check_consistent(descriptor)
            return TypeReference(descriptor.name)

        declaration = EnumDeclaration(name=descriptor.name, members=tuple(descriptor.members))
        registry.declare(descriptor, declaration)
        _LOGGER.debug("Declared enum %s (%d members)", descriptor.name, len(descriptor.members))
        return TypeReference(descriptor.name)

    def _resolve_class(self, descriptor: ClassType, registry: DeclaredTypeRegistry) -> TypeReference:
        if descriptor.name in registry:
            registry.check_consistent(descriptor)
            return TypeReference(descriptor.name)

        registry.reserve(descriptor)
        properties = tuple(
            build_property(name, self.resolve(kind, registry), self.property_visibility)
            for name, kind in descriptor.properties
        )
        declaration = ClassDeclaration(
            name=descriptor.name,
            properties=properties,
            is_interface=descriptor.is_interface,
        )
        registry.declare(descriptor, declaration)
        _LOGGER.debug("Declared %s %s", "interface" if descriptor.is_interface else "class", descriptor.name)
        return TypeReference(descriptor.name)


def _is_builtin(descriptor: ArrayType) -> bool:
    element: TypeDescriptor = descriptor.element
    while isinstance(element, ArrayType):
        element = element.element
    return isinstance(element, PrimitiveType)


def _display_name(descriptor: object) -> str:
    if isinstance(descriptor, GenericType):
        inner = ", ".join(_display_name(arg) for arg in descriptor.arguments)
        return f"{descriptor.name}<{inner}>"
    return getattr(descriptor, "name", type(descriptor).__name__)


__all__ = ["TypeResolver"]
