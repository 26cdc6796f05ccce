"""Serialize an :class:`ApiModel` into C# source text."""

from __future__ import annotations

from typing import Iterable, List

from .codemodel import (
    ApiModel,
    CallStatement,
    ClassDeclaration,
    EnumDeclaration,
    Expression,
    Literal,
    MethodDeclaration,
    PropertyDeclaration,
    TypeDeclaration,
    TypeReference,
)

INDENT = "    "

# Reserved C# keywords; contextual keywords (var, async, value ...) are valid identifiers.
CSHARP_KEYWORDS = frozenset(
    """
    abstract as base bool break byte case catch char checked class const continue
    decimal default delegate do double else enum event explicit extern false finally
    fixed float for foreach goto if implicit in int interface internal is lock long
    namespace new null object operator out override params private protected public
    readonly ref return sbyte sealed short sizeof stackalloc static string struct
    switch this throw true try typeof uint ulong unchecked unsafe ushort using
    virtual void volatile while
    """.split()
)

BANNER = (
    "//------------------------------------------------------------------------------",
    "// <auto-generated>",
    "//     This code was generated by hubgen.",
    "//",
    "//     Changes to this file may cause incorrect behavior and will be lost if",
    "//     the code is regenerated.",
    "// </auto-generated>",
    "//------------------------------------------------------------------------------",
)


class CodeEmitter:
    """Pure serializer; equal models always produce byte-identical text."""

    def emit(self, model: ApiModel) -> str:
        lines: List[str] = list(BANNER)
        lines.append("")

        depth = 0
        if model.namespace:
            lines.append(f"namespace {model.namespace}")
            lines.append("{")
            depth = 1

        usings = sort_imports(model.imports)
        for namespace in usings:
            lines.append(_indent(depth) + f"using {namespace};")
        if usings:
            lines.append("")

        blocks = [self._class_lines(model.proxy, depth)]
        blocks.extend(self._declaration_lines(item, depth) for item in model.declarations)
        for index, block in enumerate(blocks):
            if index:
                lines.append("")
            lines.extend(block)

        if model.namespace:
            lines.append("}")
        return "\n".join(lines) + "\n"

    def _declaration_lines(self, declaration: TypeDeclaration, depth: int) -> List[str]:
        if isinstance(declaration, EnumDeclaration):
            return self._enum_lines(declaration, depth)
        return self._class_lines(declaration, depth)

    def _class_lines(self, declaration: ClassDeclaration, depth: int) -> List[str]:
        pad = _indent(depth)
        keywords = [declaration.visibility]
        if declaration.is_partial:
            keywords.append("partial")
        keywords.append("interface" if declaration.is_interface else "class")
        lines = [pad + f"{' '.join(keywords)} {declaration.name}", pad + "{"]

        members: List[List[str]] = []
        if declaration.is_interface:
            members.extend([self._interface_property_lines(prop, depth + 1)] for prop in declaration.properties)
        else:
            fields = [
                _indent(depth + 1)
                + f"{prop.field.visibility} {render_type(prop.field.type)} "
                + f"{escape_identifier(prop.field.name)};"
                for prop in declaration.properties
            ]
            if fields:
                members.append(fields)
            members.extend(self._property_lines(prop, depth + 1) for prop in declaration.properties)
        members.extend(self._method_lines(method, depth + 1) for method in declaration.methods)

        for index, member in enumerate(members):
            if index:
                lines.append("")
            lines.extend(member)
        lines.append(pad + "}")
        return lines

    @staticmethod
    def _interface_property_lines(prop: PropertyDeclaration, depth: int) -> str:
        accessors = " ".join(
            part for part, enabled in (("get;", prop.has_get), ("set;", prop.has_set)) if enabled
        )
        return _indent(depth) + f"{render_type(prop.type)} {escape_identifier(prop.name)} {{ {accessors} }}"

    @staticmethod
    def _property_lines(prop: PropertyDeclaration, depth: int) -> List[str]:
        pad = _indent(depth)
        inner = _indent(depth + 1)
        body = _indent(depth + 2)
        lines = [pad + f"{prop.visibility} {render_type(prop.type)} {escape_identifier(prop.name)}", pad + "{"]
        if prop.has_get:
            lines.extend([inner + "get", inner + "{", body + f"return this.{escape_identifier(prop.field.name)};", inner + "}"])
        if prop.has_set:
            lines.extend([inner + "set", inner + "{", body + f"this.{escape_identifier(prop.field.name)} = value;", inner + "}"])
        lines.append(pad + "}")
        return lines

    def _method_lines(self, method: MethodDeclaration, depth: int) -> List[str]:
        pad = _indent(depth)
        modifiers = method.visibility + (" async" if method.is_async else "")
        parameters = ", ".join(f"{render_type(p.type)} {escape_identifier(p.name)}" for p in method.parameters)
        lines = [
            pad + f"{modifiers} {render_type(method.return_type)} {escape_identifier(method.name)}({parameters})",
            pad + "{",
        ]
        lines.extend(_indent(depth + 1) + render_statement(statement) for statement in method.body)
        lines.append(pad + "}")
        return lines

    @staticmethod
    def _enum_lines(declaration: EnumDeclaration, depth: int) -> List[str]:
        pad = _indent(depth)
        lines = [pad + f"{declaration.visibility} enum {declaration.name}", pad + "{"]
        last = len(declaration.members) - 1
        for index, member in enumerate(declaration.members):
            lines.append(_indent(depth + 1) + escape_identifier(member) + ("," if index < last else ""))
        lines.append(pad + "}")
        return lines


def render_type(reference: TypeReference) -> str:
    if reference.element is not None:
        return f"{render_type(reference.element)}[]"
    if reference.arguments:
        inner = ", ".join(render_type(arg) for arg in reference.arguments)
        return f"{reference.name}<{inner}>"
    return reference.name


def render_statement(statement: CallStatement) -> str:
    call = statement.call
    method = call.method
    if call.type_arguments:
        method += "<" + ", ".join(render_type(arg) for arg in call.type_arguments) + ">"
    arguments = ", ".join(render_expression(arg) for arg in call.arguments)
    text = f"this.{escape_identifier(call.target)}.{method}({arguments})"
    if statement.awaited:
        text = "await " + text
    if statement.returns:
        text = "return " + text
    return text + ";"


def render_expression(expression: Expression) -> str:
    if isinstance(expression, Literal):
        escaped = expression.value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return escape_identifier(expression.name)


def escape_identifier(name: str) -> str:
    """Prefix reserved keywords with ``@`` so they stay usable as identifiers."""
    return f"@{name}" if name in CSHARP_KEYWORDS else name


def sort_imports(namespaces: Iterable[str]) -> List[str]:
    """Order ``using`` directives with System namespaces first."""
    unique = set(namespaces)
    return sorted(unique, key=lambda ns: (ns != "System" and not ns.startswith("System."), ns))


def _indent(depth: int) -> str:
    return INDENT * depth


__all__ = ["CodeEmitter", "escape_identifier", "render_statement", "render_type", "sort_imports"]
