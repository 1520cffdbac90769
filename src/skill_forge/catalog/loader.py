"""
Document discovery.

Walks host directories and parses every command, agent and skill
document found in them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from skill_forge.core.constants import (
    AGENTS_DIR,
    COMMANDS_DIR,
    DOCUMENT_SUFFIX,
    MAX_DOCUMENT_BYTES,
    SKILL_ENTRY_FILE,
    SKILLS_DIR,
)
from skill_forge.documents import DocumentKind, DocumentParser, ParseResult, PromptDocument

if TYPE_CHECKING:
    from skill_forge.config import SkillForgeConfig

logger = logging.getLogger(__name__)

USER_SCOPE = "user"
PROJECT_SCOPE = "project"
EXTRA_SCOPE = "extra"


@dataclass(frozen=True)
class SearchRoot:
    """A host directory to search.

    Attributes:
        path: Directory containing commands/, agents/ and skills/.
        scope: Scope label (user, project or extra).
    """

    path: Path
    scope: str = EXTRA_SCOPE


def get_default_search_roots(config: SkillForgeConfig | None = None) -> list[SearchRoot]:
    """Get the default search roots.

    Returns:
        User root, project root and configured extra roots, without
        duplicates.
    """
    from skill_forge.config import PathsConfig

    paths = config.paths if config is not None else PathsConfig()
    candidates = [
        SearchRoot(paths.user_root, USER_SCOPE),
        SearchRoot(paths.project_root, PROJECT_SCOPE),
    ]
    candidates.extend(SearchRoot(p, EXTRA_SCOPE) for p in paths.extra_roots)

    roots: list[SearchRoot] = []
    seen: set[Path] = set()
    for root in candidates:
        resolved = root.path.expanduser().resolve()
        if resolved in seen:
            continue
        seen.add(resolved)
        roots.append(SearchRoot(resolved, root.scope))
    return roots


def is_hidden(path: Path, base: Path) -> bool:
    """Check if any part of a path below base starts with a dot."""
    try:
        parts = path.relative_to(base).parts
    except ValueError:
        return False
    return any(part.startswith(".") for part in parts)


class CatalogLoader:
    """Discovers and parses documents below search roots."""

    def __init__(
        self,
        roots: list[SearchRoot],
        parser: DocumentParser | None = None,
        max_file_bytes: int = MAX_DOCUMENT_BYTES,
        kinds: frozenset[DocumentKind] | None = None,
    ) -> None:
        """Initialize loader.

        Args:
            roots: Search roots in precedence order.
            parser: Document parser. Creates default if None.
            max_file_bytes: Larger files are skipped.
            kinds: Only discover these kinds. All kinds if None.
        """
        self.roots = roots
        self.parser = parser if parser is not None else DocumentParser()
        self.max_file_bytes = max_file_bytes
        self.kinds = kinds if kinds is not None else frozenset(DocumentKind)
        self.skipped: list[Path] = []

    def iter_files(self, root: SearchRoot) -> Iterator[tuple[Path, DocumentKind, Path]]:
        """Yield (file, kind, name_root) for every document under a root."""
        commands = root.path / COMMANDS_DIR
        if DocumentKind.COMMAND in self.kinds and commands.is_dir():
            for path in sorted(commands.rglob(f"*{DOCUMENT_SUFFIX}")):
                if path.is_file() and not is_hidden(path, commands):
                    yield path, DocumentKind.COMMAND, commands

        agents = root.path / AGENTS_DIR
        if DocumentKind.AGENT in self.kinds and agents.is_dir():
            for path in sorted(agents.glob(f"*{DOCUMENT_SUFFIX}")):
                if path.is_file() and not path.name.startswith("."):
                    yield path, DocumentKind.AGENT, agents

        skills = root.path / SKILLS_DIR
        if DocumentKind.SKILL in self.kinds and skills.is_dir():
            for entry in sorted(skills.iterdir()):
                if entry.name.startswith("."):
                    continue
                if entry.is_dir():
                    skill_file = entry / SKILL_ENTRY_FILE
                    if skill_file.is_file():
                        yield skill_file, DocumentKind.SKILL, skills
                elif entry.is_file() and entry.suffix == DOCUMENT_SUFFIX:
                    yield entry, DocumentKind.SKILL, skills

    def discover(self) -> list[ParseResult]:
        """Parse every document under every root.

        Returns:
            Parse results, successful or not, in discovery order.
        """
        results: list[ParseResult] = []
        self.skipped = []

        for root in self.roots:
            if not root.path.is_dir():
                logger.debug("Search root does not exist: %s", root.path)
                continue

            for path, kind, name_root in self.iter_files(root):
                try:
                    size = path.stat().st_size
                except OSError as e:
                    results.append(ParseResult(None, [f"Cannot stat file: {e}"], path=path))
                    continue

                if size > self.max_file_bytes:
                    logger.warning(
                        "Skipping %s: %d bytes exceeds limit of %d",
                        path,
                        size,
                        self.max_file_bytes,
                    )
                    self.skipped.append(path)
                    continue

                results.append(
                    self.parser.parse_file(path, kind, root=name_root, scope=root.scope)
                )

        logger.debug("Discovered %d documents", len(results))
        return results

    def discover_documents(self) -> list[PromptDocument]:
        """Parse every document, returning only successful parses."""
        documents: list[PromptDocument] = []
        for result in self.discover():
            if result.document is not None:
                documents.append(result.document)
            else:
                logger.warning("Failed to load %s: %s", result.path, "; ".join(result.errors))
        return documents


__all__ = [
    "EXTRA_SCOPE",
    "PROJECT_SCOPE",
    "USER_SCOPE",
    "CatalogLoader",
    "SearchRoot",
    "get_default_search_roots",
    "is_hidden",
]
