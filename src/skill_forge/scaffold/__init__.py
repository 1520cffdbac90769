"""Scaffolding of new prompt documents."""

from .templates import (
    PATTERNS,
    ScaffoldPattern,
    generate,
    get_pattern,
    list_patterns,
    target_path,
    validate_name,
    write,
)

__all__ = [
    "PATTERNS",
    "ScaffoldPattern",
    "generate",
    "get_pattern",
    "list_patterns",
    "target_path",
    "validate_name",
    "write",
]
