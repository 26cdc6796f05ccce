"""Backing-field plus accessor pairs for generated properties."""

from __future__ import annotations

from .codemodel import FieldDeclaration, PropertyDeclaration, TypeReference
from .naming import first_lower, first_upper


def build_property(name: str, type_ref: TypeReference, visibility: str = "public") -> PropertyDeclaration:
    """Return a read/write property named ``Name`` backed by private ``_name``."""
    if not name:
        raise ValueError("Property name must not be empty")
    backing = FieldDeclaration(name=f"_{first_lower(name)}", type=type_ref)
    return PropertyDeclaration(
        name=first_upper(name),
        type=type_ref,
        visibility=visibility,
        field=backing,
    )


__all__ = ["build_property"]
