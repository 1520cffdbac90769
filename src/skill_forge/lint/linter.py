"""Prompt document linter."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from skill_forge.catalog import CatalogLoader, SearchRoot, is_hidden
from skill_forge.config import LintConfig
from skill_forge.core.constants import (
    AGENTS_DIR,
    COMMANDS_DIR,
    DOCUMENT_SUFFIX,
    SKILLS_DIR,
)
from skill_forge.documents import (
    DocumentKind,
    DocumentParser,
    ParseResult,
    PromptDocument,
    find_name_root,
    infer_kind,
)

from .models import LintIssue, LintReport, Severity
from .rules import PARSE_ERROR_CODE, RULES, Rule

logger = logging.getLogger(__name__)

DIR_KINDS = {
    COMMANDS_DIR: DocumentKind.COMMAND,
    AGENTS_DIR: DocumentKind.AGENT,
    SKILLS_DIR: DocumentKind.SKILL,
}


def is_host_root(directory: Path) -> bool:
    """Check if a directory holds commands/, agents/ or skills/."""
    return any((directory / d).is_dir() for d in DIR_KINDS)


def find_kind_dir(directory: Path) -> tuple[Path, DocumentKind] | None:
    """Find the commands/, agents/ or skills/ directory a path is in.

    Returns:
        The kind directory and its kind, None if the path is in none.
    """
    for candidate in (directory, *directory.parents):
        kind = DIR_KINDS.get(candidate.name)
        if kind is not None:
            return candidate, kind
    return None


class Linter:
    """Runs lint rules over prompt documents."""

    def __init__(
        self,
        config: LintConfig | None = None,
        parser: DocumentParser | None = None,
    ) -> None:
        """Initialize linter.

        Args:
            config: Lint configuration. Uses defaults if None.
            parser: Document parser. Creates default if None.
        """
        self.config = config if config is not None else LintConfig()
        self.parser = parser if parser is not None else DocumentParser()

    @property
    def active_rules(self) -> list[Rule]:
        """Rules not disabled by configuration."""
        disabled = set(self.config.disabled_rules)
        return [r for code, r in sorted(RULES.items()) if code not in disabled]

    def new_report(self) -> LintReport:
        return LintReport(strict=self.config.strict)

    def lint_document(self, document: PromptDocument) -> list[LintIssue]:
        """Run every applicable rule over a parsed document."""
        issues: list[LintIssue] = []
        for rule in self.active_rules:
            if document.kind not in rule.kinds:
                continue
            if rule.requires_frontmatter and not document.has_frontmatter:
                continue
            for message, line in rule.check(document):
                issues.append(
                    LintIssue(
                        code=rule.code,
                        severity=rule.severity_for(document.kind),
                        message=message,
                        path=document.path,
                        line=line,
                        document=document.qualified_name,
                    )
                )
        return issues

    def lint_result(self, result: ParseResult) -> list[LintIssue]:
        """Lint a parse result, reporting parse failures as issues."""
        if result.document is None:
            if PARSE_ERROR_CODE in self.config.disabled_rules:
                return []
            return [
                LintIssue(
                    code=PARSE_ERROR_CODE,
                    severity=Severity.ERROR,
                    message=error,
                    path=result.path,
                    line=result.error_line,
                )
                for error in result.errors
            ]
        return self.lint_document(result.document)

    def lint_text(
        self, content: str, kind: DocumentKind = DocumentKind.COMMAND, name: str = "command"
    ) -> LintReport:
        """Lint in-memory document content."""
        report = self.new_report()
        report.extend(self.lint_result(self.parser.parse(content, kind, name=name)))
        report.files_checked = 1
        return report

    def lint_file(
        self,
        path: Path,
        kind: DocumentKind | None = None,
        root: Path | None = None,
    ) -> LintReport:
        """Lint a single document file.

        Args:
            path: Markdown file.
            kind: Document kind. Inferred from the location if None.
            root: Directory the name is derived relative to. Found from
                the location if None.
        """
        kind = kind if kind is not None else infer_kind(path)
        if root is None:
            root = find_name_root(path, kind)
        result = self.parser.parse_file(path, kind, root=root)
        report = self.new_report()
        report.extend(self.lint_result(result))
        report.files_checked = 1
        return report

    def lint_catalog(self, loader: CatalogLoader, within: Path | None = None) -> LintReport:
        """Lint every document a loader discovers.

        Args:
            loader: Document loader.
            within: Only lint documents below this directory.
        """
        report = self.new_report()
        for result in loader.discover():
            if within is not None and result.path is not None:
                if not result.path.is_relative_to(within):
                    continue
            report.extend(self.lint_result(result))
            report.files_checked += 1
        return report

    def lint_tree(self, directory: Path) -> LintReport:
        """Lint markdown files below a directory outside any host layout.

        Hidden files and directories and files over the size limit are
        skipped; each file's kind is inferred from its location.
        """
        report = self.new_report()
        for file in sorted(directory.rglob(f"*{DOCUMENT_SUFFIX}")):
            if not file.is_file() or is_hidden(file, directory):
                continue
            size = file.stat().st_size
            if size > self.config.max_file_bytes:
                logger.warning(
                    "Skipping %s: %d bytes exceeds limit of %d",
                    file,
                    size,
                    self.config.max_file_bytes,
                )
                continue
            report.extend(self.lint_file(file).issues)
            report.files_checked += 1
        return report

    def lint_directory(self, directory: Path) -> LintReport:
        """Lint a directory the way the catalog would discover it.

        A host root is searched for all kinds. A commands/, agents/ or
        skills/ directory, or a directory inside one, is searched for
        that kind only, so skill reference files are not linted as
        skills. Any other directory is linted with lint_tree().
        """
        if is_host_root(directory):
            loader = CatalogLoader(
                [SearchRoot(directory)], self.parser, self.config.max_file_bytes
            )
            return self.lint_catalog(loader)

        resolved = directory.resolve()
        found = find_kind_dir(resolved)
        if found is not None:
            kind_dir, kind = found
            loader = CatalogLoader(
                [SearchRoot(kind_dir.parent)],
                self.parser,
                self.config.max_file_bytes,
                kinds=frozenset({kind}),
            )
            return self.lint_catalog(loader, within=resolved)

        return self.lint_tree(directory)

    def lint_paths(self, paths: Iterable[Path]) -> LintReport:
        """Lint files and directories."""
        report = self.new_report()
        for path in paths:
            if path.is_dir():
                sub_report = self.lint_directory(path)
            elif path.is_file():
                sub_report = self.lint_file(path)
            else:
                logger.warning("Path does not exist: %s", path)
                sub_report = self.new_report()
                sub_report.extend(
                    [
                        LintIssue(
                            code=PARSE_ERROR_CODE,
                            severity=Severity.ERROR,
                            message="Path does not exist",
                            path=path,
                        )
                    ]
                )

            report.extend(sub_report.issues)
            report.files_checked += sub_report.files_checked
        return report
