"""Documentation linting for prompt documents."""

from .linter import Linter, find_kind_dir, is_host_root
from .models import LintIssue, LintReport, Severity
from .rules import RULES, Rule, count_hint_arguments

__all__ = [
    "RULES",
    "LintIssue",
    "LintReport",
    "Linter",
    "Rule",
    "Severity",
    "count_hint_arguments",
    "find_kind_dir",
    "is_host_root",
]
