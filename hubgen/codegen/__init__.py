"""Code model, type resolution and C# emission for hub client proxies."""

from .builder import ApiModelBuilder
from .codemodel import ApiModel, TypeReference
from .emitter import CodeEmitter
from .operations import OperationBuilder, build_operation
from .properties import build_property
from .registry import DeclaredTypeRegistry
from .resolver import TypeResolver

__all__ = [
    "ApiModel",
    "ApiModelBuilder",
    "CodeEmitter",
    "DeclaredTypeRegistry",
    "OperationBuilder",
    "TypeReference",
    "TypeResolver",
    "build_operation",
    "build_property",
]
