"""Contract introspection: turn a contract source into :class:`ContractMetadata`."""

from __future__ import annotations

from pathlib import Path

from ..models import ContractMetadata
from .python_module import introspect_module, load_python_contract
from .yaml_contract import load_yaml_contract, parse_yaml_contract

_DOCUMENT_SUFFIXES = {".yml", ".yaml", ".json"}


def load_contract(source: str | Path) -> ContractMetadata:
    """Load a contract from a YAML/JSON document, a ``.py`` file or a module name."""
    text = str(source)
    if Path(text).suffix.lower() in _DOCUMENT_SUFFIXES:
        return load_yaml_contract(Path(text))
    return load_python_contract(text)


__all__ = [
    "introspect_module",
    "load_contract",
    "load_python_contract",
    "load_yaml_contract",
    "parse_yaml_contract",
]
