"""Method declarations for hub operations."""

from __future__ import annotations

from typing import List, Tuple

from ..errors import InvalidOperationShape
from ..models import CONNECTION_CONTEXT, Direction, OperationDescriptor, TypeDescriptor
from .codemodel import (
    CallStatement,
    Literal,
    MethodCall,
    MethodDeclaration,
    Parameter,
    TypeReference,
    VariableRef,
)
from .naming import first_upper
from .registry import DeclaredTypeRegistry
from .resolver import TypeResolver

TASK_NAMESPACE = "System.Threading.Tasks"
SYSTEM_NAMESPACE = "System"
INVOKE_METHOD = "InvokeAsync"
SUBSCRIBE_METHOD = "On"
HANDLER_PARAMETER = "handler"
# HubConnection.On<T1..T8> is the widest subscription overload.
MAX_HANDLER_ARGUMENTS = 8


class OperationBuilder:
    """Builds proxy methods for server-received and client-invoked operations."""

    def __init__(
        self,
        resolver: TypeResolver | None = None,
        *,
        visibility: str = "protected",
        client_suffix: str = "On",
    ) -> None:
        self.resolver = resolver or TypeResolver()
        self.visibility = visibility
        self.client_suffix = client_suffix

    def build(
        self,
        descriptor: OperationDescriptor,
        connection_property: str,
        registry: DeclaredTypeRegistry,
    ) -> MethodDeclaration:
        if descriptor.direction is Direction.SERVER_RECEIVED:
            return self._build_server_received(descriptor, connection_property, registry)
        return self._build_client_invoked(descriptor, connection_property, registry)

    def _build_server_received(
        self,
        descriptor: OperationDescriptor,
        connection_property: str,
        registry: DeclaredTypeRegistry,
    ) -> MethodDeclaration:
        if not descriptor.async_void:
            raise InvalidOperationShape(descriptor.name, descriptor.returns)

        parameters = self._resolve_parameters(descriptor, registry)
        registry.require_import(TASK_NAMESPACE)
        arguments = [Literal(descriptor.name)]
        arguments.extend(VariableRef(parameter.name) for parameter in parameters)
        call = MethodCall(
            target=connection_property,
            method=INVOKE_METHOD,
            arguments=tuple(arguments),
        )
        return MethodDeclaration(
            name=descriptor.name,
            parameters=parameters,
            return_type=TypeReference("Task"),
            visibility=self.visibility,
            is_async=True,
            body=(CallStatement(call, awaited=True),),
        )

    def _build_client_invoked(
        self,
        descriptor: OperationDescriptor,
        connection_property: str,
        registry: DeclaredTypeRegistry,
    ) -> MethodDeclaration:
        parameters = self._resolve_parameters(descriptor, registry)
        if len(parameters) > MAX_HANDLER_ARGUMENTS:
            raise InvalidOperationShape(
                descriptor.name,
                detail=(
                    f"has {len(parameters)} parameters; client callbacks take at most "
                    f"{MAX_HANDLER_ARGUMENTS}"
                ),
            )
        registry.require_import(SYSTEM_NAMESPACE)
        type_arguments = tuple(parameter.type for parameter in parameters)
        handler = Parameter(HANDLER_PARAMETER, TypeReference("Action", arguments=type_arguments))
        call = MethodCall(
            target=connection_property,
            method=SUBSCRIBE_METHOD,
            arguments=(Literal(descriptor.name), VariableRef(handler.name)),
            type_arguments=type_arguments,
        )
        return MethodDeclaration(
            name=first_upper(descriptor.name) + self.client_suffix,
            parameters=(handler,),
            return_type=TypeReference("IDisposable"),
            visibility=self.visibility,
            body=(CallStatement(call, returns=True),),
        )

    def _resolve_parameters(
        self, descriptor: OperationDescriptor, registry: DeclaredTypeRegistry
    ) -> Tuple[Parameter, ...]:
        resolved: List[Parameter] = []
        for name, kind in strip_connection_context(descriptor.parameters):
            resolved.append(Parameter(name, self.resolver.resolve(kind, registry)))
        return tuple(resolved)


def build_operation(
    descriptor: OperationDescriptor,
    connection_property: str,
    registry: DeclaredTypeRegistry,
    *,
    visibility: str = "protected",
    client_suffix: str = "On",
) -> MethodDeclaration:
    """Build one proxy method with a throwaway :class:`OperationBuilder`."""
    builder = OperationBuilder(visibility=visibility, client_suffix=client_suffix)
    return builder.build(descriptor, connection_property, registry)


def strip_connection_context(
    parameters: Tuple[Tuple[str, TypeDescriptor], ...]
) -> List[Tuple[str, TypeDescriptor]]:
    """Drop parameters the host framework supplies itself."""
    return [(name, kind) for name, kind in parameters if kind != CONNECTION_CONTEXT]


__all__ = ["OperationBuilder", "build_operation", "strip_connection_context"]
