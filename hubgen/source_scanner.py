"""Recover already-declared type names from previously generated C# source."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Set, Tuple

from .logging import get_logger

_NAMESPACE_PATTERN = re.compile(r"\bnamespace\s+([A-Za-z_][\w.]*)\s*([{;])")
_DECLARATION_PATTERN = re.compile(
    r"\b(?:class|interface|struct|enum|record)\s+(?:(?:class|struct)\s+)?@?([A-Za-z_]\w*)"
)
_ARRAY_PATTERN = re.compile(r"\b([A-Za-z_]\w*)((?:\s*\[\s*\])+)")

_LOGGER = get_logger("source_scanner")


def scan_declared_types(text: str, namespace: str) -> Set[str]:
    """Return type names declared (or referenced as arrays) inside ``namespace``."""
    code = strip_comments_and_strings(text)
    names: Set[str] = set()
    for start, end in _namespace_bodies(code, namespace):
        body = code[start:end]
        names.update(match.group(1) for match in _DECLARATION_PATTERN.finditer(body))
        for match in _ARRAY_PATTERN.finditer(body):
            # A jagged Name[][] implies every inner rank as well.
            for rank in range(1, match.group(2).count("[") + 1):
                names.add(match.group(1) + "[]" * rank)
    return names


def scan_declared_types_file(path: Path, namespace: str) -> Set[str]:
    """Scan ``path`` when it exists; a missing file yields no declarations."""
    if not path.is_file():
        _LOGGER.debug("No prior output at %s", path)
        return set()
    return scan_declared_types(path.read_text(encoding="utf-8"), namespace)


def strip_comments_and_strings(text: str) -> str:
    """Blank out comments and literals so declarations inside them are ignored."""
    out: List[str] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        pair = text[index : index + 2]
        if pair == "//":
            end = text.find("\n", index)
            end = length if end == -1 else end
            out.append(" " * (end - index))
            index = end
        elif pair == "/*":
            end = text.find("*/", index + 2)
            end = length if end == -1 else end + 2
            out.append(_blank(text[index:end]))
            index = end
        elif pair == '@"':
            end = index + 2
            while end < length:
                if text[end] == '"':
                    if text[end + 1 : end + 2] == '"':
                        end += 2
                        continue
                    end += 1
                    break
                end += 1
            out.append(_blank(text[index:end]))
            index = end
        elif char in {'"', "'"}:
            end = index + 1
            while end < length and text[end] != char and text[end] != "\n":
                end += 2 if text[end] == "\\" else 1
            end = min(end + 1, length)
            out.append(_blank(text[index:end]))
            index = end
        else:
            out.append(char)
            index += 1
    return "".join(out)


def _namespace_bodies(code: str, namespace: str) -> List[Tuple[int, int]]:
    spans: List[Tuple[int, int, str]] = []
    bodies: List[Tuple[int, int]] = []
    for match in _NAMESPACE_PATTERN.finditer(code):
        if match.group(2) == ";":
            start, end = match.end(), len(code)
        else:
            start = match.end()
            end = _matching_brace(code, match.end() - 1)
        enclosing = [name for (s, e, name) in spans if s <= match.start() < e]
        full_name = ".".join(enclosing + [match.group(1)])
        spans.append((start, end, full_name))
        if full_name == namespace:
            bodies.append((start, end))
    return bodies


def _matching_brace(code: str, open_index: int) -> int:
    depth = 0
    for index in range(open_index, len(code)):
        if code[index] == "{":
            depth += 1
        elif code[index] == "}":
            depth -= 1
            if depth == 0:
                return index
    return len(code)


def _blank(segment: str) -> str:
    return "".join("\n" if char == "\n" else " " for char in segment)


__all__ = ["scan_declared_types", "scan_declared_types_file", "strip_comments_and_strings"]
