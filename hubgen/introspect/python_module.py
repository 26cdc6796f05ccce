"""Introspect hub contracts declared as Python modules."""

from __future__ import annotations

import collections.abc
import enum
import importlib
import importlib.util
import inspect
import sys
import typing
from pathlib import Path
from types import ModuleType
from typing import Any, Dict, List, Optional, Tuple

from ..codegen.naming import to_camel_case, to_pascal_case
from ..contract import CLIENT_API_ATTR, OPERATION_ATTR, ClientProxy, Hub
from ..errors import ContractLoadError
from ..logging import get_logger
from ..models import (
    CONNECTION_CONTEXT,
    ArrayType,
    ClassType,
    ContractMetadata,
    ContractRole,
    ContractType,
    Direction,
    EnumType,
    GenericType,
    OperationDescriptor,
    PrimitiveType,
    TypeDescriptor,
)
from .primitives import PYTHON_PRIMITIVES

_SEQUENCE_ORIGINS = {
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
}
_BARE_CONTAINERS = {list, tuple, dict, set, frozenset}

_LOGGER = get_logger("introspect.python")


def load_python_contract(source: str) -> ContractMetadata:
    """Import ``source`` (a ``.py`` path or dotted module name) and introspect it."""
    module = _import_contract_module(source)
    return introspect_module(module)


def introspect_module(module: ModuleType) -> ContractMetadata:
    """Return contract metadata for hubs and client APIs visible in ``module``."""
    mapper = TypeMapper()
    types: List[ContractType] = []
    seen: set[int] = set()
    for value in list(vars(module).values()):
        if not inspect.isclass(value) or id(value) in seen:
            continue
        if value is not Hub and issubclass(value, Hub):
            seen.add(id(value))
            types.append(_describe_hub(value, mapper))
        elif getattr(value, CLIENT_API_ATTR, None) is not None:
            seen.add(id(value))
            types.append(_describe_client_api(value, mapper))
    _LOGGER.debug("Introspected %d contract types from %s", len(types), module.__name__)
    return ContractMetadata(source=module.__name__, types=tuple(types))


class TypeMapper:
    """Maps Python annotations onto type descriptors, sharing class instances."""

    def __init__(self) -> None:
        self._cache: Dict[type, TypeDescriptor] = {}

    def describe(self, annotation: Any) -> TypeDescriptor:
        if annotation is ClientProxy:
            return CONNECTION_CONTEXT
        primitive = _lookup_primitive(annotation)
        if primitive is not None:
            return primitive

        origin = typing.get_origin(annotation)
        if origin is not None:
            args = typing.get_args(annotation)
            if origin in _SEQUENCE_ORIGINS and len(args) == 1:
                return ArrayType(self.describe(args[0]))
            if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
                return ArrayType(self.describe(args[0]))
            return GenericType(
                _annotation_name(origin),
                tuple(PrimitiveType(_annotation_name(arg)) for arg in args),
            )

        if isinstance(annotation, typing.TypeVar):
            return GenericType(annotation.__name__)
        if inspect.isclass(annotation):
            if annotation in self._cache:
                return self._cache[annotation]
            if issubclass(annotation, enum.Enum):
                described = EnumType(annotation.__name__, tuple(member.name for member in annotation))
                self._cache[annotation] = described
                return described
            if annotation in _BARE_CONTAINERS or getattr(annotation, "__parameters__", ()):
                return GenericType(annotation.__name__)
            return self._describe_class(annotation)
        raise ContractLoadError(f"Cannot interpret type annotation {annotation!r}")

    def _describe_class(self, cls: type) -> ClassType:
        described = ClassType(cls.__name__, is_interface=bool(getattr(cls, "_is_protocol", False)))
        # Registered before expansion so self-referencing classes terminate.
        self._cache[cls] = described
        hints = _type_hints(cls, cls.__qualname__)
        for name, annotation in hints.items():
            if name.startswith("_") or typing.get_origin(annotation) is typing.ClassVar:
                continue
            described.properties.append((to_camel_case(name), self.describe(annotation)))
        return described


def _describe_hub(cls: type, mapper: TypeMapper) -> ContractType:
    operations: List[OperationDescriptor] = []
    for attr, value in _ordered_members(cls):
        func = _unwrap(value)
        marker = getattr(func, OPERATION_ATTR, None) if func is not None else None
        if marker is None:
            continue
        name = marker.get("name") or to_pascal_case(attr)
        hints = _type_hints(func, f"{cls.__name__}.{attr}")
        parameters = _describe_parameters(func, hints, mapper, skip_bound=not isinstance(value, staticmethod))
        async_void, returns = _return_shape(func, hints)
        operations.append(
            OperationDescriptor(
                name=name,
                direction=Direction.SERVER_RECEIVED,
                parameters=parameters,
                async_void=async_void,
                returns=returns,
            )
        )
    return ContractType(cls.__name__, ContractRole.HUB, tuple(operations))


def _describe_client_api(cls: type, mapper: TypeMapper) -> ContractType:
    operations: List[OperationDescriptor] = []
    for attr, value in _ordered_members(cls):
        if attr.startswith("_"):
            continue
        func = _unwrap(value)
        if func is None:
            continue
        hints = _type_hints(func, f"{cls.__name__}.{attr}")
        skip_bound = not isinstance(value, staticmethod)
        operations.append(
            OperationDescriptor(
                name=to_pascal_case(attr),
                direction=Direction.CLIENT_INVOKED,
                parameters=_describe_parameters(func, hints, mapper, skip_bound=skip_bound),
            )
        )
    name = getattr(cls, CLIENT_API_ATTR).get("name") or cls.__name__
    return ContractType(name, ContractRole.CLIENT_API, tuple(operations))


def _describe_parameters(
    func: Any,
    hints: Dict[str, Any],
    mapper: TypeMapper,
    *,
    skip_bound: bool,
) -> Tuple[Tuple[str, TypeDescriptor], ...]:
    parameters = list(inspect.signature(func).parameters.values())
    if skip_bound and parameters and parameters[0].name in {"self", "cls"}:
        parameters = parameters[1:]
    described: List[Tuple[str, TypeDescriptor]] = []
    for parameter in parameters:
        if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
            raise ContractLoadError(
                f"{func.__qualname__}: variadic parameter '{parameter.name}' is not supported"
            )
        if parameter.name not in hints:
            raise ContractLoadError(
                f"{func.__qualname__}: parameter '{parameter.name}' has no type annotation"
            )
        described.append((to_camel_case(parameter.name), mapper.describe(hints[parameter.name])))
    return tuple(described)


def _return_shape(func: Any, hints: Dict[str, Any]) -> Tuple[bool, str]:
    is_async = inspect.iscoroutinefunction(func)
    returns = hints.get("return", type(None))
    returns_nothing = returns is type(None)
    if is_async and returns_nothing:
        return True, "Task"
    label = "None" if returns_nothing else _annotation_name(returns)
    return False, f"{'async ' if is_async else ''}def -> {label}"


def _ordered_members(cls: type) -> List[Tuple[str, Any]]:
    """Members in definition order, base classes first, overrides in place."""
    members: Dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass is object or klass is Hub:
            continue
        for attr, value in vars(klass).items():
            members[attr] = value
    return list(members.items())


def _unwrap(value: Any) -> Optional[Any]:
    if isinstance(value, (staticmethod, classmethod)):
        return value.__func__
    if inspect.isfunction(value):
        return value
    return None


def _type_hints(target: Any, label: str) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(target)
    except Exception as exc:
        raise ContractLoadError(f"Cannot resolve type annotations of {label}: {exc}") from exc


def _lookup_primitive(annotation: Any) -> Optional[PrimitiveType]:
    try:
        return PYTHON_PRIMITIVES.get(annotation)
    except TypeError:  # unhashable annotation objects
        return None


def _annotation_name(annotation: Any) -> str:
    if annotation is type(None):
        return "None"
    name = getattr(annotation, "__name__", None) or getattr(annotation, "_name", None)
    return str(name or annotation)


def _import_contract_module(source: str) -> ModuleType:
    path = Path(source).expanduser()
    if path.suffix != ".py":
        try:
            return importlib.import_module(source)
        except ImportError as exc:
            raise ContractLoadError(f"Cannot import contract module '{source}': {exc}") from exc

    if not path.is_file():
        raise ContractLoadError(f"Contract module [{path}] not found")
    module_name = f"_hubgen_contract_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ContractLoadError(f"Cannot load contract module from {path}")
    module = importlib.util.module_from_spec(spec)
    # Sibling modules of the contract must be importable while it executes.
    folder = str(path.resolve().parent)
    sys.path.insert(0, folder)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        raise ContractLoadError(f"Failed to execute contract module {path}: {exc}") from exc
    finally:
        if folder in sys.path:
            sys.path.remove(folder)
    return module


__all__ = ["TypeMapper", "introspect_module", "load_python_contract"]
