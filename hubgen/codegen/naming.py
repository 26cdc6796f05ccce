"""Identifier casing helpers."""

from __future__ import annotations

import re

_WORD_SPLIT = re.compile(r"[_\-\s]+")


def first_upper(text: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    return text[:1].upper() + text[1:]


def first_lower(text: str) -> str:
    """Lower-case the first character, leaving the rest untouched."""
    return text[:1].lower() + text[1:]


def to_pascal_case(name: str) -> str:
    """Convert snake_case or kebab-case to PascalCase; PascalCase passes through."""
    parts = [part for part in _WORD_SPLIT.split(name) if part]
    return "".join(first_upper(part) for part in parts)


def to_camel_case(name: str) -> str:
    """Convert snake_case or kebab-case to camelCase."""
    return first_lower(to_pascal_case(name))


__all__ = ["first_lower", "first_upper", "to_camel_case", "to_pascal_case"]
