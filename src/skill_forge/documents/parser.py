"""Prompt document parser.

Reads markdown documents, splits off their frontmatter and derives the
invocable name from the file location.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from skill_forge.core.constants import (
    AGENTS_DIR,
    COMMANDS_DIR,
    SKILL_ENTRY_FILE,
    SKILLS_DIR,
)
from skill_forge.core.errors import DocumentError, FrontmatterError

from .base import DocumentKind, PromptDocument
from .frontmatter import Frontmatter, load_frontmatter, split_frontmatter


@dataclass
class ParseResult:
    """Result of parsing a document.

    Attributes:
        document: Parsed document, None when parsing failed.
        errors: Problems that prevented parsing.
        warnings: Non-fatal observations.
        path: Source file, if any.
        error_line: Line of the first error, if known.
    """

    document: PromptDocument | None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    path: Path | None = None
    error_line: int | None = None

    @property
    def ok(self) -> bool:
        return self.document is not None and not self.errors


def derive_name(
    path: Path, kind: DocumentKind, root: Path | None = None
) -> tuple[str, str]:
    """Derive (name, namespace) from a document's location.

    Commands are namespaced by their sub-directories below ``root``:
    ``commands/git/commit.md`` is ``git:commit``. A skill stored as
    ``skills/<skill>/SKILL.md`` is named after its directory.
    """
    if kind == DocumentKind.SKILL and path.name == SKILL_ENTRY_FILE:
        return path.parent.name, ""

    if kind == DocumentKind.COMMAND and root is not None:
        try:
            relative = path.relative_to(root)
        except ValueError:
            relative = Path(path.name)
        namespace = ":".join(relative.parts[:-1])
        return relative.stem, namespace

    return path.stem, ""


def infer_kind(path: Path) -> DocumentKind:
    """Guess a document's kind from its location.

    ``SKILL.md`` files and anything below a ``skills`` directory are
    skills, anything below ``agents`` is an agent, everything else is a
    command.
    """
    if path.name == SKILL_ENTRY_FILE:
        return DocumentKind.SKILL
    for parent in path.parents:
        if parent.name == AGENTS_DIR:
            return DocumentKind.AGENT
        if parent.name == SKILLS_DIR:
            return DocumentKind.SKILL
        if parent.name == COMMANDS_DIR:
            return DocumentKind.COMMAND
    return DocumentKind.COMMAND


def find_name_root(path: Path, kind: DocumentKind) -> Path | None:
    """Find the kind directory a document's name is relative to."""
    directory = {
        DocumentKind.COMMAND: COMMANDS_DIR,
        DocumentKind.AGENT: AGENTS_DIR,
        DocumentKind.SKILL: SKILLS_DIR,
    }[kind]
    for parent in path.parents:
        if parent.name == directory:
            return parent
    return None


class DocumentParser:
    """Parses prompt documents."""

    def parse_file(
        self,
        path: Path,
        kind: DocumentKind,
        root: Path | None = None,
        scope: str = "",
    ) -> ParseResult:
        """Parse a document file.

        Args:
            path: Markdown file.
            kind: Document kind.
            root: Directory the name is derived relative to.
            scope: Search root scope label.
        """
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return ParseResult(None, [f"Failed to read file: {e}"], path=path)

        name, namespace = derive_name(path, kind, root)
        result = self.parse(content, kind, name=name, namespace=namespace)
        result.path = path
        if result.document is not None:
            result.document.path = path
            result.document.scope = scope
        return result

    def parse(
        self,
        content: str,
        kind: DocumentKind,
        name: str = "",
        namespace: str = "",
    ) -> ParseResult:
        """Parse document content.

        Agents and skills take their name from the ``name`` frontmatter
        key when present; commands are always named by location.
        """
        warnings: list[str] = []

        try:
            split = split_frontmatter(content)
            if split.frontmatter_text is None:
                frontmatter = Frontmatter()
            else:
                frontmatter = load_frontmatter(split.frontmatter_text)
        except FrontmatterError as e:
            return ParseResult(None, [str(e)], error_line=e.line)

        if kind != DocumentKind.COMMAND:
            declared = frontmatter.get_str("name")
            if declared:
                if name and declared != name:
                    warnings.append(
                        f"Frontmatter name '{declared}' differs from file name '{name}'"
                    )
                name = declared

        if not name:
            return ParseResult(None, ["Document has no name"], warnings)

        document = PromptDocument(
            kind=kind,
            name=name,
            body=split.body,
            frontmatter=frontmatter,
            namespace=namespace,
            has_frontmatter=split.has_frontmatter,
            body_line=split.body_line,
        )
        return ParseResult(document, [], warnings)


def read_document(path: Path, kind: DocumentKind | None = None) -> PromptDocument:
    """Parse a single document file outside any catalog.

    Args:
        path: Markdown file.
        kind: Document kind. Inferred from the location if None.

    Raises:
        DocumentError: If the file cannot be read or parsed.
    """
    kind = kind if kind is not None else infer_kind(path)
    result = DocumentParser().parse_file(path, kind, root=find_name_root(path, kind))
    if result.document is None:
        raise DocumentError(f"{path}: {'; '.join(result.errors)}")
    return result.document


__all__ = [
    "DocumentParser",
    "ParseResult",
    "derive_name",
    "find_name_root",
    "infer_kind",
    "read_document",
]
