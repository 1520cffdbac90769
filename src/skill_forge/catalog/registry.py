"""
Document catalog.

Registry of discovered prompt documents with lookup, search and
"did you mean" suggestions.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from skill_forge.core.constants import SUGGESTION_THRESHOLD
from skill_forge.documents import DocumentKind, ParseResult, PromptDocument

from .loader import EXTRA_SCOPE, PROJECT_SCOPE, USER_SCOPE, CatalogLoader

logger = logging.getLogger(__name__)

# Higher rank shadows lower rank
SCOPE_RANK: dict[str, int] = {
    EXTRA_SCOPE: 0,
    USER_SCOPE: 1,
    PROJECT_SCOPE: 2,
}

KIND_ORDER = (DocumentKind.COMMAND, DocumentKind.AGENT, DocumentKind.SKILL)


def levenshtein_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein distance between two strings."""
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)

    if len(s2) == 0:
        return len(s1)

    previous_row = list(range(len(s2) + 1))

    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


def similarity(s1: str, s2: str) -> float:
    """Similarity score between 0 and 1 based on edit distance."""
    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0
    return 1.0 - levenshtein_distance(s1, s2) / max(len(s1), len(s2))


def normalize_name(name: str) -> str:
    """Normalize a lookup name: strip the slash prefix and lower-case."""
    return name.strip().lstrip("/").lower()


class Catalog:
    """Registry of prompt documents keyed by kind and qualified name."""

    _instance: Catalog | None = None
    _lock: threading.Lock = threading.Lock()

    def __init__(self) -> None:
        self._documents: dict[tuple[DocumentKind, str], PromptDocument] = {}

    @classmethod
    def get_instance(cls) -> Catalog:
        """Get singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset singleton (for testing)."""
        with cls._lock:
            cls._instance = None

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def register(self, document: PromptDocument) -> bool:
        """Register a document.

        A document from a higher-precedence scope shadows one with the
        same kind and qualified name from a lower one.

        Returns:
            True if the document is now the registered one, False if it
            is shadowed by an existing document.

        Raises:
            ValueError: If a document with the same key and scope exists.
        """
        key = (document.kind, normalize_name(document.qualified_name))
        existing = self._documents.get(key)

        if existing is not None:
            new_rank = SCOPE_RANK.get(document.scope, 0)
            old_rank = SCOPE_RANK.get(existing.scope, 0)
            if new_rank == old_rank:
                raise ValueError(
                    f"{document.kind.value.capitalize()} already registered: "
                    f"{document.qualified_name} ({existing.path})"
                )
            if new_rank < old_rank:
                logger.debug(
                    "%s %s from %s is shadowed by %s",
                    document.kind.value,
                    document.qualified_name,
                    document.path,
                    existing.path,
                )
                return False
            logger.debug(
                "%s %s from %s shadows %s",
                document.kind.value,
                document.qualified_name,
                document.path,
                existing.path,
            )

        self._documents[key] = document
        logger.debug("Registered %s: %s", document.kind.value, document.qualified_name)
        return True

    def unregister(self, name: str, kind: DocumentKind | None = None) -> bool:
        """Unregister a document.

        Returns:
            True if unregistered, False if not found.
        """
        document = self.get(name, kind)
        if document is None:
            return False
        del self._documents[(document.kind, normalize_name(document.qualified_name))]
        return True

    def clear(self) -> None:
        self._documents.clear()

    def get(self, name: str, kind: DocumentKind | None = None) -> PromptDocument | None:
        """Get a document by qualified name, or by bare name when unambiguous.

        Args:
            name: ``namespace:name`` or ``name``, with or without ``/``.
            kind: Restrict lookup to one kind. Without it, commands are
                tried first, then agents, then skills.
        """
        normalized = normalize_name(name)
        kinds = (kind,) if kind is not None else KIND_ORDER

        for k in kinds:
            document = self._documents.get((k, normalized))
            if document is not None:
                return document

        for k in kinds:
            matches = [
                d
                for (doc_kind, _), d in self._documents.items()
                if doc_kind == k and d.name.lower() == normalized
            ]
            if len(matches) == 1:
                return matches[0]
            if len(matches) > 1:
                logger.debug(
                    "Ambiguous %s name %s: %s",
                    k.value,
                    name,
                    ", ".join(sorted(d.qualified_name for d in matches)),
                )
                return None

        return None

    def list_documents(
        self,
        kind: DocumentKind | None = None,
        namespace: str | None = None,
    ) -> list[PromptDocument]:
        """List documents, optionally filtered by kind and namespace."""
        documents = [
            d
            for d in self._documents.values()
            if (kind is None or d.kind == kind)
            and (namespace is None or d.namespace == namespace)
        ]
        return sorted(
            documents, key=lambda d: (KIND_ORDER.index(d.kind), d.qualified_name)
        )

    def names(self, kind: DocumentKind | None = None) -> list[str]:
        """Qualified names of registered documents."""
        return [d.qualified_name for d in self.list_documents(kind)]

    def namespaces(self) -> list[str]:
        """Distinct non-empty command namespaces."""
        return sorted({d.namespace for d in self._documents.values() if d.namespace})

    def search(self, query: str) -> list[PromptDocument]:
        """Search documents by name or description."""
        return [d for d in self.list_documents() if d.matches_query(query)]

    def suggest(
        self, name: str, kind: DocumentKind | None = DocumentKind.COMMAND
    ) -> str | None:
        """Suggest the closest registered name.

        Returns:
            Best qualified name scoring above the similarity threshold,
            None if the name exists or nothing is close.
        """
        normalized = normalize_name(name)
        if self.get(normalized, kind) is not None:
            return None

        best_match: str | None = None
        best_score = 0.0
        for candidate in self.names(kind):
            score = similarity(normalized, candidate.lower())
            if score > best_score and score > SUGGESTION_THRESHOLD:
                best_score = score
                best_match = candidate
        return best_match

    def load(self, loader: CatalogLoader) -> list[ParseResult]:
        """Discover and register documents.

        Returns:
            Parse results that could not be registered.
        """
        failures: list[ParseResult] = []
        for result in loader.discover():
            if result.document is None:
                logger.warning(
                    "Could not parse %s: %s", result.path, "; ".join(result.errors)
                )
                failures.append(result)
                continue
            try:
                self.register(result.document)
            except ValueError as e:
                logger.warning("Could not register document: %s", e)
                result.errors.append(str(e))
                failures.append(result)
        return failures

    def get_stats(self) -> dict[str, Any]:
        """Get catalog statistics."""
        return {
            "total": len(self._documents),
            "commands": len(self.list_documents(DocumentKind.COMMAND)),
            "agents": len(self.list_documents(DocumentKind.AGENT)),
            "skills": len(self.list_documents(DocumentKind.SKILL)),
            "namespaces": self.namespaces(),
        }


__all__ = [
    "SCOPE_RANK",
    "Catalog",
    "levenshtein_distance",
    "normalize_name",
    "similarity",
]
