"""Error types raised while generating a hub client proxy."""

from __future__ import annotations


class GenerationError(RuntimeError):
    """Base class for failures that abort a generation run."""


class UnsupportedTypeKind(GenerationError):
    """Raised when a referenced type is generic or of an unknown kind."""

    def __init__(self, type_name: str, reason: str | None = None) -> None:
        detail = reason or "type kind is not supported"
        super().__init__(f"Cannot generate type '{type_name}': {detail}")
        self.type_name = type_name


class InvalidOperationShape(GenerationError):
    """Raised when an operation's signature cannot be expressed on the proxy.

    Server-received operations must be async calls with no value; client
    callbacks are limited by the connection's ``On`` overloads.
    """

    def __init__(
        self, operation: str, returns: str | None = None, *, detail: str | None = None
    ) -> None:
        if detail is None:
            shown = returns or "a non-async signature"
            detail = f"must be asynchronous and return no value (Task); found {shown}"
        super().__init__(f"Operation '{operation}' {detail}")
        self.operation = operation


class ContractNotFound(GenerationError):
    """Raised when the contract metadata holds no hub type."""


class ClientApiNotFound(GenerationError):
    """Raised when the contract metadata holds no client API description."""


class AmbiguousClientApi(GenerationError):
    """Raised when more than one client API description is present."""


class TypeConflict(GenerationError):
    """Raised when two different types are declared under the same name."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"Type '{type_name}' is declared twice with different shapes")
        self.type_name = type_name


class DuplicateDeclaration(GenerationError):
    """Raised when a type name would be declared more than once."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"Type '{type_name}' is already declared")
        self.type_name = type_name


class ContractLoadError(RuntimeError):
    """Raised when a contract source cannot be read or introspected."""


__all__ = [
    "AmbiguousClientApi",
    "ClientApiNotFound",
    "ContractLoadError",
    "ContractNotFound",
    "DuplicateDeclaration",
    "GenerationError",
    "InvalidOperationShape",
    "TypeConflict",
    "UnsupportedTypeKind",
]
