"""Built-in C# types recognised by the introspectors."""

from __future__ import annotations

import datetime as _dt
import decimal
import uuid
from typing import Any, Dict

from ..models import CONNECTION_CONTEXT, PrimitiveType

CSHARP_PRIMITIVES: Dict[str, PrimitiveType] = {
    name: PrimitiveType(name)
    for name in (
        "string",
        "int",
        "long",
        "short",
        "byte",
        "sbyte",
        "uint",
        "ulong",
        "ushort",
        "float",
        "double",
        "decimal",
        "bool",
        "char",
        "object",
    )
}
CSHARP_PRIMITIVES.update(
    {
        name: PrimitiveType(name, "System")
        for name in ("DateTime", "DateTimeOffset", "TimeSpan", "Guid", "Uri")
    }
)
CSHARP_PRIMITIVES[CONNECTION_CONTEXT.name] = CONNECTION_CONTEXT

PYTHON_PRIMITIVES: Dict[Any, PrimitiveType] = {
    str: CSHARP_PRIMITIVES["string"],
    int: CSHARP_PRIMITIVES["int"],
    float: CSHARP_PRIMITIVES["double"],
    bool: CSHARP_PRIMITIVES["bool"],
    bytes: PrimitiveType("byte[]"),
    decimal.Decimal: CSHARP_PRIMITIVES["decimal"],
    object: CSHARP_PRIMITIVES["object"],
    Any: CSHARP_PRIMITIVES["object"],
    _dt.datetime: CSHARP_PRIMITIVES["DateTime"],
    _dt.date: CSHARP_PRIMITIVES["DateTime"],
    _dt.time: CSHARP_PRIMITIVES["TimeSpan"],
    _dt.timedelta: CSHARP_PRIMITIVES["TimeSpan"],
    uuid.UUID: CSHARP_PRIMITIVES["Guid"],
}

__all__ = ["CSHARP_PRIMITIVES", "PYTHON_PRIMITIVES"]
