"""Markers used to describe a hub contract in Python.

A contract module declares one :class:`Hub` subclass whose server-received
operations are marked with :func:`server_received`, and one class marked
with :func:`client_api` whose public functions describe the callbacks the
server may invoke on connected clients::

    class ChatHub(Hub):
        @server_received
        async def send_message(self, room: str, text: str) -> None: ...

    @client_api
    class ChatClient:
        @staticmethod
        def message_received(client: ClientProxy, text: str) -> None: ...
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

OPERATION_ATTR = "__hubgen_operation__"
CLIENT_API_ATTR = "__hubgen_client_api__"

_F = TypeVar("_F", bound=Callable[..., Any])
_T = TypeVar("_T", bound=type)


class Hub:
    """Base class for hub contracts."""


class ClientProxy:
    """Annotation for the connection context the host passes to callbacks.

    Parameters annotated with it never appear in the generated signature.
    """


def server_received(func: Optional[_F] = None, *, name: Optional[str] = None) -> Any:
    """Mark a hub method as callable by clients.

    ``name`` overrides the wire name, which otherwise is the PascalCase form
    of the function name.
    """

    def decorate(target: _F) -> _F:
        setattr(target, OPERATION_ATTR, {"name": name})
        return target

    if func is not None:
        return decorate(func)
    return decorate


def client_api(cls: Optional[_T] = None, *, name: Optional[str] = None) -> Any:
    """Mark a class as the description of client-invoked callbacks."""

    def decorate(target: _T) -> _T:
        setattr(target, CLIENT_API_ATTR, {"name": name or target.__name__})
        return target

    if cls is not None:
        return decorate(cls)
    return decorate


__all__ = ["ClientProxy", "Hub", "client_api", "server_received"]
