"""Placeholder scanning and argument substitution."""

from .placeholders import (
    ARGUMENTS_TOKEN,
    FileReference,
    Placeholder,
    ShellLine,
    find_file_references,
    find_placeholders,
    find_shell_lines,
    max_positional,
    uses_arguments,
)
from .renderer import RenderResult, render

__all__ = [
    "ARGUMENTS_TOKEN",
    "FileReference",
    "Placeholder",
    "RenderResult",
    "ShellLine",
    "find_file_references",
    "find_placeholders",
    "find_shell_lines",
    "max_positional",
    "render",
    "uses_arguments",
]
