"""
Lint rules for prompt documents.

Each rule inspects a parsed document and yields (message, line)
findings. Rules are registered with their code, default severity and
the document kinds they apply to.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from skill_forge.core.constants import (
    AGENT_KEYS,
    COMMAND_KEYS,
    MODEL_ALIASES,
    MODEL_ID_PREFIX,
    PERMISSION_MODES,
    SHELL_TOOL,
    SKILL_KEYS,
    STRUCTURED_KEYS,
    TOOL_LIST_KEYS,
)
from skill_forge.documents import DocumentKind, PromptDocument
from skill_forge.templating import find_placeholders, find_shell_lines

from .models import Severity

Finding = tuple[str, int | None]
CheckFunc = Callable[[PromptDocument], Iterator[Finding]]

NAME_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")
TOOL_SPEC_PATTERN = re.compile(r"^[A-Za-z][\w-]*(\([^()]*\))?$")
HINT_GROUP_PATTERN = re.compile(r"\[[^\]]*\]|<[^>]*>")

KNOWN_KEYS: dict[DocumentKind, frozenset[str]] = {
    DocumentKind.COMMAND: COMMAND_KEYS,
    DocumentKind.AGENT: AGENT_KEYS,
    DocumentKind.SKILL: SKILL_KEYS,
}

ALL_KINDS = frozenset(DocumentKind)


@dataclass(frozen=True)
class Rule:
    """A registered lint rule.

    Attributes:
        code: Rule code.
        severity: Default severity.
        summary: One-line description.
        kinds: Document kinds the rule applies to.
        requires_frontmatter: Skip documents without a frontmatter block.
        check: Function yielding findings.
        kind_severity: Severity overrides for specific kinds.
    """

    code: str
    severity: Severity
    summary: str
    kinds: frozenset[DocumentKind]
    requires_frontmatter: bool
    check: CheckFunc
    kind_severity: dict[DocumentKind, Severity] = field(default_factory=dict)

    def severity_for(self, kind: DocumentKind) -> Severity:
        return self.kind_severity.get(kind, self.severity)


RULES: dict[str, Rule] = {}

# Rules reported by the linter itself rather than a document check
PARSE_ERROR_CODE = "FM001"


def rule(
    code: str,
    severity: Severity,
    summary: str,
    kinds: frozenset[DocumentKind] = ALL_KINDS,
    requires_frontmatter: bool = True,
    kind_severity: dict[DocumentKind, Severity] | None = None,
) -> Callable[[CheckFunc], CheckFunc]:
    """Register a check function as a rule."""

    def decorator(func: CheckFunc) -> CheckFunc:
        if code in RULES:
            raise ValueError(f"Rule already registered: {code}")
        RULES[code] = Rule(
            code, severity, summary, kinds, requires_frontmatter, func, kind_severity or {}
        )
        return func

    return decorator


def count_hint_arguments(hint: str) -> int:
    """Count arguments described by an ``argument-hint``.

    Bracketed groups (``[a] [b]`` or ``<a> <b>``) are counted when
    present, otherwise whitespace separated words.
    """
    groups = HINT_GROUP_PATTERN.findall(hint)
    if groups:
        return len(groups)
    return len(hint.split())


def has_shell_tool(tools: list[str]) -> bool:
    return any(t == SHELL_TOOL or t.startswith(f"{SHELL_TOOL}(") for t in tools)


@rule(
    "FM002",
    Severity.ERROR,
    "Document has no frontmatter block",
    requires_frontmatter=False,
    kind_severity={DocumentKind.AGENT: Severity.WARNING, DocumentKind.SKILL: Severity.WARNING},
)
def check_has_frontmatter(doc: PromptDocument) -> Iterator[Finding]:
    if not doc.has_frontmatter:
        yield "No frontmatter found", 1


@rule("FM003", Severity.ERROR, "Missing or empty description")
def check_description(doc: PromptDocument) -> Iterator[Finding]:
    if not doc.description:
        yield 'Missing required "description" field', None


@rule("FM004", Severity.WARNING, "Unknown frontmatter key")
def check_known_keys(doc: PromptDocument) -> Iterator[Finding]:
    known = KNOWN_KEYS[doc.kind]
    for key in doc.frontmatter.keys():
        if key not in known:
            yield f'Unknown {doc.kind.value} frontmatter key "{key}"', None


@rule("FM005", Severity.WARNING, "Value is not a string or string list")
def check_plain_values(doc: PromptDocument) -> Iterator[Finding]:
    for key in doc.frontmatter.keys():
        if key in STRUCTURED_KEYS:
            continue
        if not doc.frontmatter.is_plain(key):
            kind = type(doc.frontmatter.get(key)).__name__
            yield f'Value of "{key}" should be a string or list of strings, got {kind}', None


@rule("FM006", Severity.WARNING, "Frontmatter line is not valid YAML")
def check_repaired_lines(doc: PromptDocument) -> Iterator[Finding]:
    for key in doc.frontmatter.repaired_keys:
        yield f'Value of "{key}" is not valid YAML and was read as a plain string; quote it', None


@rule(
    "AR001",
    Severity.WARNING,
    "Arguments used without argument-hint",
    kinds=frozenset({DocumentKind.COMMAND}),
)
def check_argument_hint_present(doc: PromptDocument) -> Iterator[Finding]:
    placeholders = find_placeholders(doc.body, doc.body_line)
    if placeholders and not doc.argument_hint:
        tokens = ", ".join(dict.fromkeys(p.token for p in placeholders))
        yield f'Using arguments ({tokens}) but no "argument-hint" found', placeholders[0].line


@rule(
    "AR002",
    Severity.WARNING,
    "Positional argument not covered by argument-hint",
    kinds=frozenset({DocumentKind.COMMAND}),
)
def check_argument_hint_coverage(doc: PromptDocument) -> Iterator[Finding]:
    if not doc.argument_hint:
        return
    declared = count_hint_arguments(doc.argument_hint)
    reported: set[int] = set()
    for placeholder in find_placeholders(doc.body, doc.body_line):
        if placeholder.index > declared and placeholder.index not in reported:
            reported.add(placeholder.index)
            yield (
                f"{placeholder.token} referenced but argument-hint declares "
                f"{declared} argument(s)",
                placeholder.line,
            )


@rule(
    "AR003",
    Severity.INFO,
    "argument-hint declared but no placeholders used",
    kinds=frozenset({DocumentKind.COMMAND}),
)
def check_argument_hint_used(doc: PromptDocument) -> Iterator[Finding]:
    if doc.argument_hint and not find_placeholders(doc.body):
        yield "argument-hint declared but the body uses no $ARGUMENTS or $N", None


@rule(
    "TL001",
    Severity.WARNING,
    "Shell lines without Bash in allowed-tools",
    kinds=frozenset({DocumentKind.COMMAND, DocumentKind.SKILL}),
)
def check_shell_permission(doc: PromptDocument) -> Iterator[Finding]:
    shell_lines = find_shell_lines(doc.body, doc.body_line)
    if shell_lines and not has_shell_tool(doc.allowed_tools):
        yield (
            f"{len(shell_lines)} shell line(s) used but allowed-tools grants no "
            f"{SHELL_TOOL} tool",
            shell_lines[0].line,
        )


@rule("TL002", Severity.WARNING, "Malformed tool specification")
def check_tool_specs(doc: PromptDocument) -> Iterator[Finding]:
    for key in sorted(TOOL_LIST_KEYS):
        if key not in doc.frontmatter or not doc.frontmatter.is_plain(key):
            continue
        for tool in doc.frontmatter.get_list(key):
            if not TOOL_SPEC_PATTERN.match(tool):
                yield f'Malformed tool "{tool}" in {key}', None


@rule("MD001", Severity.WARNING, "Unknown model")
def check_model(doc: PromptDocument) -> Iterator[Finding]:
    model = doc.model
    if model and model not in MODEL_ALIASES and not model.startswith(MODEL_ID_PREFIX):
        aliases = ", ".join(sorted(MODEL_ALIASES))
        yield f'Unknown model "{model}" (expected one of {aliases} or a full model id)', None


@rule("MD002", Severity.ERROR, "Invalid permissionMode")
def check_permission_mode(doc: PromptDocument) -> Iterator[Finding]:
    mode = doc.permission_mode
    if mode and mode not in PERMISSION_MODES:
        modes = ", ".join(sorted(PERMISSION_MODES))
        yield f'Invalid permissionMode "{mode}" (expected one of {modes})', None


@rule(
    "AG001",
    Severity.ERROR,
    "Agent name missing or invalid",
    kinds=frozenset({DocumentKind.AGENT}),
)
def check_agent_name(doc: PromptDocument) -> Iterator[Finding]:
    name = doc.frontmatter.get_str("name")
    if not name:
        yield 'Agent is missing required "name" field', None
    elif not NAME_PATTERN.match(name):
        yield (
            f'Agent name "{name}" must start with a letter and contain only '
            "lowercase letters, numbers, and hyphens",
            None,
        )


@rule(
    "SK001",
    Severity.ERROR,
    "Skill name missing or invalid",
    kinds=frozenset({DocumentKind.SKILL}),
)
def check_skill_name(doc: PromptDocument) -> Iterator[Finding]:
    name = doc.frontmatter.get_str("name")
    if not name:
        yield 'Skill is missing required "name" field', None
    elif not NAME_PATTERN.match(name):
        yield (
            f'Skill name "{name}" must start with a letter and contain only '
            "lowercase letters, numbers, and hyphens",
            None,
        )


@rule("BD001", Severity.ERROR, "Empty body", requires_frontmatter=False)
def check_body(doc: PromptDocument) -> Iterator[Finding]:
    if not doc.body.strip():
        yield "Document body is empty", doc.body_line


__all__ = [
    "PARSE_ERROR_CODE",
    "RULES",
    "Rule",
    "count_hint_arguments",
    "has_shell_tool",
    "rule",
]
