"""Lint result types."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class Severity(str, Enum):
    """Issue severity."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class LintIssue:
    """A single lint finding.

    Attributes:
        code: Rule code, e.g. ``FM003``.
        severity: Issue severity.
        message: Human-readable description.
        path: File the issue was found in.
        line: 1-based line number, if known.
        document: Qualified name of the document, if parsed.
    """

    code: str
    severity: Severity
    message: str
    path: Path | None = None
    line: int | None = None
    document: str = ""

    @property
    def location(self) -> str:
        """``path:line`` style location."""
        if self.path is None:
            return self.document or "<memory>"
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "code": self.code,
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.path is not None:
            result["path"] = str(self.path)
        if self.line is not None:
            result["line"] = self.line
        if self.document:
            result["document"] = self.document
        return result


@dataclass
class LintReport:
    """Aggregated lint results.

    Attributes:
        issues: All findings in discovery order.
        files_checked: Number of documents examined.
        strict: Treat warnings as failures.
    """

    issues: list[LintIssue] = field(default_factory=list)
    files_checked: int = 0
    strict: bool = False

    @property
    def errors(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def infos(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == Severity.INFO]

    @property
    def ok(self) -> bool:
        """True when there are no errors (and no warnings in strict mode)."""
        if self.errors:
            return False
        return not (self.strict and self.warnings)

    def extend(self, issues: list[LintIssue]) -> None:
        self.issues.extend(issues)

    def codes(self) -> list[str]:
        """Rule codes reported, in order."""
        return [i.code for i in self.issues]

    def by_path(self) -> dict[str, list[LintIssue]]:
        """Group issues by file."""
        grouped: dict[str, list[LintIssue]] = defaultdict(list)
        for issue in self.issues:
            key = str(issue.path) if issue.path is not None else issue.document
            grouped[key].append(issue)
        return dict(grouped)

    def summary(self) -> str:
        return (
            f"{self.files_checked} file(s) checked: "
            f"{len(self.errors)} error(s), {len(self.warnings)} warning(s)"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "files_checked": self.files_checked,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "issues": [i.to_dict() for i in self.issues],
        }
