"""Assemble the full proxy code model from contract metadata."""

from __future__ import annotations

from typing import List

from ..errors import AmbiguousClientApi, ClientApiNotFound, ContractNotFound
from ..logging import get_logger
from ..models import ContractMetadata, ContractRole, Direction, PrimitiveType
from .codemodel import ApiModel, ClassDeclaration, MethodDeclaration
from .operations import OperationBuilder
from .properties import build_property
from .registry import DeclaredTypeRegistry
from .resolver import TypeResolver

CONNECTION_TYPE = PrimitiveType("HubConnection", "Microsoft.AspNetCore.SignalR.Client")


class ApiModelBuilder:
    """Walks a contract and produces one immutable :class:`ApiModel`."""

    def __init__(
        self,
        *,
        connection_property: str = "HubConnection",
        visibility: str = "protected",
        client_suffix: str = "On",
    ) -> None:
        self.connection_property = connection_property
        self.visibility = visibility
        self.resolver = TypeResolver()
        self.operations = OperationBuilder(
            self.resolver, visibility=visibility, client_suffix=client_suffix
        )
        self.logger = get_logger("builder")

    def build(
        self,
        metadata: ContractMetadata,
        namespace: str,
        class_name: str,
        registry: DeclaredTypeRegistry | None = None,
    ) -> ApiModel:
        registry = registry if registry is not None else DeclaredTypeRegistry()

        hubs = metadata.of_role(ContractRole.HUB)
        if not hubs:
            raise ContractNotFound(f"No hub contract found in {metadata.source}")
        hub = hubs[0]
        if len(hubs) > 1:
            self.logger.warning(
                "Found %d hub contracts in %s; using %s", len(hubs), metadata.source, hub.name
            )

        client_apis = metadata.of_role(ContractRole.CLIENT_API)
        if not client_apis:
            raise ClientApiNotFound(f"No client API description found in {metadata.source}")
        if len(client_apis) > 1:
            names = ", ".join(item.name for item in client_apis)
            raise AmbiguousClientApi(f"Expected one client API description, found: {names}")
        client_api = client_apis[0]

        connection = build_property(
            self.connection_property,
            self.resolver.resolve(CONNECTION_TYPE, registry),
            self.visibility,
        )

        methods: List[MethodDeclaration] = []
        operations = []
        for operation in hub.operations:
            if operation.direction is not Direction.SERVER_RECEIVED:
                self.logger.warning(
                    "Skipping %s.%s: hub entries must be server-received operations",
                    hub.name,
                    operation.name,
                )
                continue
            methods.append(self.operations.build(operation, connection.name, registry))
            operations.append(operation)
        for operation in client_api.operations:
            methods.append(self.operations.build(operation, connection.name, registry))
            operations.append(operation)

        self.logger.debug(
            "Built %d methods for %s from %s and %s",
            len(methods),
            class_name,
            hub.name,
            client_api.name,
        )

        proxy = ClassDeclaration(
            name=class_name,
            properties=(connection,),
            methods=tuple(methods),
            is_partial=True,
        )
        return ApiModel(
            namespace=namespace,
            class_name=class_name,
            connection_property_name=connection.name,
            imports=registry.imports,
            operations=tuple(operations),
            proxy=proxy,
            declared_types=registry.declared_types,
            declarations=registry.declarations,
        )


__all__ = ["ApiModelBuilder", "CONNECTION_TYPE"]
