"""Load hub contracts described as YAML (or JSON) documents.

Example document::

    types:
      Coordinate:
        kind: class
        properties:
          x: double
          y: double
    hub:
      name: MapHub
      operations:
        - name: Track
          parameters:
            position: Coordinate
    client_api:
      name: MapClient
      operations:
        - name: Moved
          parameters:
            client: IClientProxy
            position: Coordinate
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple

import yaml

from ..errors import ContractLoadError
from ..models import (
    ArrayType,
    ClassType,
    ContractMetadata,
    ContractRole,
    ContractType,
    Direction,
    EnumType,
    GenericType,
    OperationDescriptor,
    TypeDescriptor,
)
from .primitives import CSHARP_PRIMITIVES

_ASYNC_VOID_RETURNS = {"Task", "System.Threading.Tasks.Task"}
_TYPE_KINDS = {"class", "interface", "enum"}


def load_yaml_contract(path: Path) -> ContractMetadata:
    """Read and parse the contract document at ``path``."""
    path = Path(path)
    if not path.is_file():
        raise ContractLoadError(f"Contract document [{path}] not found")
    return parse_yaml_contract(path.read_text(encoding="utf-8"), source=str(path))


def parse_yaml_contract(text: str, *, source: str = "<contract>") -> ContractMetadata:
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ContractLoadError(f"Failed to parse {source}: {exc}") from exc
    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise ContractLoadError(f"{source} must contain a mapping at the root")

    table = _TypeTable(_as_mapping(document.get("types"), "types"))
    types: List[ContractType] = []
    hub = document.get("hub")
    if hub is not None:
        types.append(_read_contract_type(hub, "hub", ContractRole.HUB, table))
    client_api = document.get("client_api")
    if client_api is not None:
        types.append(_read_contract_type(client_api, "client_api", ContractRole.CLIENT_API, table))
    return ContractMetadata(source=source, types=tuple(types))


class _TypeTable:
    """Resolves type expressions against the document's ``types`` section."""

    def __init__(self, definitions: Mapping[str, Any]) -> None:
        self._definitions = definitions
        self._built: Dict[str, TypeDescriptor] = {}

    def parse(self, expression: Any, where: str) -> TypeDescriptor:
        if not isinstance(expression, str) or not expression.strip():
            raise ContractLoadError(f"{where}: type must be a non-empty string")
        text = expression.strip()
        if text.endswith("[]"):
            return ArrayType(self.parse(text[:-2], where))
        if text.endswith("?"):
            return GenericType("Nullable", (self.parse(text[:-1], where),))
        if "<" in text and text.endswith(">"):
            base, inner = text[:-1].split("<", 1)
            arguments = tuple(self.parse(part, where) for part in _split_arguments(inner))
            return GenericType(base.strip(), arguments)
        if text in CSHARP_PRIMITIVES:
            return CSHARP_PRIMITIVES[text]
        if text in self._definitions:
            return self._build(text)
        raise ContractLoadError(f"{where}: unknown type '{text}'")

    def _build(self, name: str) -> TypeDescriptor:
        if name in self._built:
            return self._built[name]
        definition = _as_mapping(self._definitions[name], f"types.{name}")
        kind = str(definition.get("kind", "class"))
        if kind not in _TYPE_KINDS:
            raise ContractLoadError(f"types.{name}: unknown kind '{kind}'")

        if kind == "enum":
            members = definition.get("members") or []
            if not isinstance(members, list) or not all(isinstance(item, str) for item in members):
                raise ContractLoadError(f"types.{name}.members must be a list of names")
            described: TypeDescriptor = EnumType(name, tuple(members))
            self._built[name] = described
            return described

        described = ClassType(name, is_interface=kind == "interface")
        # Registered before expansion so self-referencing types terminate.
        self._built[name] = described
        properties = _as_mapping(definition.get("properties"), f"types.{name}.properties")
        for prop_name, prop_type in properties.items():
            described.properties.append(
                (str(prop_name), self.parse(prop_type, f"types.{name}.{prop_name}"))
            )
        return described


def _read_contract_type(
    raw: Any, section: str, role: ContractRole, table: _TypeTable
) -> ContractType:
    data = _as_mapping(raw, section)
    name = str(data.get("name") or section)
    operations_raw = data.get("operations") or []
    if not isinstance(operations_raw, list):
        raise ContractLoadError(f"{section}.operations must be a list")

    direction = Direction.SERVER_RECEIVED if role is ContractRole.HUB else Direction.CLIENT_INVOKED
    operations: List[OperationDescriptor] = []
    for index, item in enumerate(operations_raw):
        where = f"{section}.operations[{index}]"
        entry = _as_mapping(item, where)
        op_name = entry.get("name")
        if not isinstance(op_name, str) or not op_name:
            raise ContractLoadError(f"{where}: operation name is required")
        parameters: List[Tuple[str, TypeDescriptor]] = [
            (str(param), table.parse(kind, f"{where}.{param}"))
            for param, kind in _as_mapping(entry.get("parameters"), f"{where}.parameters").items()
        ]
        returns = str(entry.get("returns", "Task"))
        operations.append(
            OperationDescriptor(
                name=op_name,
                direction=direction,
                parameters=tuple(parameters),
                async_void=returns in _ASYNC_VOID_RETURNS,
                returns=returns,
            )
        )
    return ContractType(name, role, tuple(operations))


def _split_arguments(text: str) -> List[str]:
    parts: List[str] = []
    depth = 0
    current: List[str] = []
    for char in text:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]


def _as_mapping(value: Any, where: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ContractLoadError(f"{where} must be a mapping")
    return value


__all__ = ["load_yaml_contract", "parse_yaml_contract"]
