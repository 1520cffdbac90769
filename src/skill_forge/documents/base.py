"""Base types for prompt documents.

A prompt document is a markdown file consumed by the assistant host:
a slash command template, a sub-agent persona or a skill guide.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .frontmatter import Frontmatter


class DocumentKind(str, Enum):
    """Kind of prompt document, determined by its directory."""

    COMMAND = "command"
    AGENT = "agent"
    SKILL = "skill"


@dataclass
class PromptDocument:
    """A parsed prompt document.

    Attributes:
        kind: Document kind.
        name: Invocable name derived from location or frontmatter.
        body: Markdown body after the frontmatter block.
        frontmatter: Parsed frontmatter record.
        namespace: Colon separated sub-directory path ("" at top level).
        path: Source file, None for in-memory documents.
        has_frontmatter: Whether a frontmatter block was present.
        body_line: 1-based line number where the body starts.
        scope: Search root scope the document was found in.
    """

    kind: DocumentKind
    name: str
    body: str
    frontmatter: Frontmatter = field(default_factory=Frontmatter)
    namespace: str = ""
    path: Path | None = None
    has_frontmatter: bool = True
    body_line: int = 1
    scope: str = ""

    @property
    def qualified_name(self) -> str:
        """Name including namespace, e.g. ``git:commit``."""
        if self.namespace:
            return f"{self.namespace}:{self.name}"
        return self.name

    @property
    def description(self) -> str:
        return self.frontmatter.get_str("description")

    @property
    def argument_hint(self) -> str:
        return self.frontmatter.get_str("argument-hint")

    @property
    def allowed_tools(self) -> list[str]:
        return self.frontmatter.get_list("allowed-tools")

    @property
    def tools(self) -> list[str]:
        """Tools granted to an agent (``tools`` key)."""
        return self.frontmatter.get_list("tools")

    @property
    def model(self) -> str:
        return self.frontmatter.get_str("model")

    @property
    def permission_mode(self) -> str:
        return self.frontmatter.get_str("permissionMode")

    def matches_query(self, query: str) -> bool:
        """Check if the document matches a search query."""
        query_lower = query.lower()
        return (
            query_lower in self.qualified_name.lower()
            or query_lower in self.description.lower()
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        result: dict[str, Any] = {
            "kind": self.kind.value,
            "name": self.name,
            "qualified_name": self.qualified_name,
            "description": self.description,
        }
        if self.namespace:
            result["namespace"] = self.namespace
        if self.path is not None:
            result["path"] = str(self.path)
        if self.scope:
            result["scope"] = self.scope
        if self.frontmatter:
            result["frontmatter"] = self.frontmatter.to_dict()
        return result

    def get_help(self) -> str:
        """Get help text for this document."""
        prefix = "/" if self.kind == DocumentKind.COMMAND else ""
        lines = [f"{prefix}{self.qualified_name} - {self.description or '(no description)'}", ""]

        if self.argument_hint:
            lines.append(f"Usage: /{self.qualified_name} {self.argument_hint}")
        if self.allowed_tools:
            lines.append(f"Allowed tools: {', '.join(self.allowed_tools)}")
        if self.tools:
            lines.append(f"Tools: {', '.join(self.tools)}")
        if self.model:
            lines.append(f"Model: {self.model}")
        if self.permission_mode:
            lines.append(f"Permission mode: {self.permission_mode}")
        if self.path is not None:
            lines.append(f"Source: {self.path}")

        return "\n".join(lines).rstrip() + "\n"
