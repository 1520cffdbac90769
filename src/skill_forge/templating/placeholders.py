"""Placeholder and directive scanning.

Recognized conventions in a document body:

- ``$ARGUMENTS``: all invocation arguments joined by spaces
- ``$1``, ``$2``, ...: positional arguments (``$10`` is one token)
- ``!`command```: shell line executed by the host before prompting
- ``@path``: file reference inlined by the host
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Optional backslash escape, then the token
PLACEHOLDER_PATTERN = re.compile(r"(\\?)\$(ARGUMENTS|[1-9]\d*)")
SHELL_LINE_PATTERN = re.compile(r"!`([^`\n]+)`")
FILE_REFERENCE_PATTERN = re.compile(r"(?<![\w@`])@([\w\-./]+)")

ARGUMENTS_TOKEN = "$ARGUMENTS"


@dataclass(frozen=True)
class Placeholder:
    """A placeholder occurrence.

    Attributes:
        token: Literal token text, e.g. ``$2``.
        index: Positional index (1-based), 0 for ``$ARGUMENTS``.
        line: 1-based line number.
    """

    token: str
    index: int
    line: int

    @property
    def is_positional(self) -> bool:
        return self.index > 0

    @property
    def kind(self) -> str:
        """Either "positional" for $N or "arguments" for $ARGUMENTS."""
        return "positional" if self.is_positional else "arguments"


@dataclass(frozen=True)
class ShellLine:
    """A ``!`command``` directive."""

    command: str
    line: int


@dataclass(frozen=True)
class FileReference:
    """An ``@path`` file reference."""

    path: str
    line: int


def _line_at(text: str, offset: int, first_line: int) -> int:
    return first_line + text.count("\n", 0, offset)


def find_placeholders(text: str, first_line: int = 1) -> list[Placeholder]:
    """Find unescaped placeholders in order of appearance."""
    found: list[Placeholder] = []
    for match in PLACEHOLDER_PATTERN.finditer(text):
        if match.group(1):
            continue
        value = match.group(2)
        index = 0 if value == "ARGUMENTS" else int(value)
        found.append(
            Placeholder(
                token=f"${value}",
                index=index,
                line=_line_at(text, match.start(), first_line),
            )
        )
    return found


def max_positional(text: str) -> int:
    """Highest positional index referenced, 0 if none."""
    return max((p.index for p in find_placeholders(text)), default=0)


def uses_arguments(text: str) -> bool:
    """Check whether the text references any argument placeholder."""
    return bool(find_placeholders(text))


def find_shell_lines(text: str, first_line: int = 1) -> list[ShellLine]:
    """Find ``!`command``` directives."""
    return [
        ShellLine(command=m.group(1).strip(), line=_line_at(text, m.start(), first_line))
        for m in SHELL_LINE_PATTERN.finditer(text)
    ]


def find_file_references(text: str, first_line: int = 1) -> list[FileReference]:
    """Find ``@path`` references, ignoring e-mail addresses."""
    refs: list[FileReference] = []
    for match in FILE_REFERENCE_PATTERN.finditer(text):
        path = match.group(1).rstrip(".")
        if path:
            refs.append(FileReference(path=path, line=_line_at(text, match.start(), first_line)))
    return refs


__all__ = [
    "ARGUMENTS_TOKEN",
    "FileReference",
    "Placeholder",
    "ShellLine",
    "find_file_references",
    "find_placeholders",
    "find_shell_lines",
    "max_positional",
    "uses_arguments",
]
