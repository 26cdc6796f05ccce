"""Bookkeeping for type names declared before and during a generation pass."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..errors import DuplicateDeclaration, TypeConflict
from ..models import TypeDescriptor, shape_of
from .codemodel import TypeDeclaration


class DeclaredTypeRegistry:
    """Tracks which type names exist so each is declared at most once.

    Seeded with the names found in previously generated output. A registry
    belongs to a single run; it is handed explicitly to every resolver and
    builder call and discarded once the model is frozen.
    """

    def __init__(self, existing: Iterable[str] = ()) -> None:
        self._existing: Set[str] = set(existing)
        self._reserved: Dict[str, TypeDescriptor] = {}
        self._declared: Dict[str, TypeDescriptor] = {}
        self._pending: List[TypeDescriptor] = []
        self._declarations: List[TypeDeclaration] = []
        self._imports: List[str] = []

    def __contains__(self, name: object) -> bool:
        return name in self._existing or name in self._reserved or name in self._declared

    def __len__(self) -> int:
        return len(self._existing | set(self._reserved) | set(self._declared))

    @property
    def existing(self) -> Set[str]:
        return set(self._existing)

    @property
    def declared_types(self) -> Tuple[TypeDescriptor, ...]:
        return tuple(self._pending)

    @property
    def declarations(self) -> Tuple[TypeDeclaration, ...]:
        return tuple(self._declarations)

    @property
    def imports(self) -> Tuple[str, ...]:
        return tuple(self._imports)

    def reserve(self, descriptor: TypeDescriptor) -> None:
        """Claim a name before its members are expanded (guards cycles)."""
        if descriptor.name in self:
            raise DuplicateDeclaration(descriptor.name)
        self._reserved[descriptor.name] = descriptor

    def declare(
        self,
        descriptor: TypeDescriptor,
        declaration: Optional[TypeDeclaration] = None,
    ) -> None:
        """Record a newly introduced type and its emittable declaration."""
        name = descriptor.name
        if name in self._existing or name in self._declared:
            raise DuplicateDeclaration(name)
        reserved = self._reserved.pop(name, None)
        if reserved is not None and shape_of(reserved) != shape_of(descriptor):
            raise TypeConflict(name)
        self._declared[name] = descriptor
        self._pending.append(descriptor)
        if declaration is not None:
            self._declarations.append(declaration)

    def check_consistent(self, descriptor: TypeDescriptor) -> None:
        """Fail when ``descriptor`` shadows a different type with the same name."""
        known = self._declared.get(descriptor.name) or self._reserved.get(descriptor.name)
        if known is None or known is descriptor:
            return
        if shape_of(known) != shape_of(descriptor):
            raise TypeConflict(descriptor.name)

    def require_import(self, namespace: Optional[str]) -> None:
        if namespace and namespace not in self._imports:
            self._imports.append(namespace)


__all__ = ["DeclaredTypeRegistry"]
