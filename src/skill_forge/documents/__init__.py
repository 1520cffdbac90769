"""
Prompt document model.

Frontmatter parsing and the command, agent and skill document types.
"""

from .base import DocumentKind, PromptDocument
from .frontmatter import (
    Frontmatter,
    SplitDocument,
    dump_frontmatter,
    load_frontmatter,
    parse_frontmatter,
    split_frontmatter,
    split_tool_list,
)
from .parser import (
    DocumentParser,
    ParseResult,
    derive_name,
    find_name_root,
    infer_kind,
    read_document,
)

__all__ = [
    "DocumentKind",
    "DocumentParser",
    "Frontmatter",
    "ParseResult",
    "PromptDocument",
    "SplitDocument",
    "derive_name",
    "dump_frontmatter",
    "find_name_root",
    "infer_kind",
    "load_frontmatter",
    "parse_frontmatter",
    "read_document",
    "split_frontmatter",
    "split_tool_list",
]
