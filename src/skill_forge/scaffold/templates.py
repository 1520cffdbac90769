"""
Document scaffolding.

Generates new command, agent and skill documents from named patterns.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from skill_forge.core.constants import DOCUMENT_SUFFIX, SKILL_ENTRY_FILE
from skill_forge.core.errors import TemplateError
from skill_forge.documents import DocumentKind

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")

DEFAULT_NAME = "command"


@dataclass(frozen=True)
class ScaffoldPattern:
    """A named document template.

    Attributes:
        name: Pattern name.
        kind: Kind of document produced.
        summary: One-line description.
        template: Text with a ``{name}`` field.
    """

    name: str
    kind: DocumentKind
    summary: str
    template: str

    def render(self, name: str) -> str:
        return self.template.format(name=name)


SIMPLE = ScaffoldPattern(
    name="simple",
    kind=DocumentKind.COMMAND,
    summary="Command without arguments",
    template="""---
description: Brief description of what {name} does
---

# {name}

Write your command instructions here.
This is a simple command with no arguments.
""",
)

ARGS = ScaffoldPattern(
    name="args",
    kind=DocumentKind.COMMAND,
    summary="Command taking free-form input via $ARGUMENTS",
    template="""---
description: Process input with {name} command
argument-hint: "[input-text]"
allowed-tools: Read, Write
---

# {name}

Processing input: $ARGUMENTS

## Task

Execute the following task based on the provided input.
""",
)

POSITIONAL = ScaffoldPattern(
    name="positional",
    kind=DocumentKind.COMMAND,
    summary="Command taking positional parameters $1, $2, $3",
    template="""---
description: {name} with specific parameters
argument-hint: "[param1] [param2] [optional-param3]"
allowed-tools: Read, Write
---

# {name}

Parameters:
- First parameter: $1
- Second parameter: $2
- Third parameter: $3

## Task

Execute using the provided parameters.
""",
)

BASH = ScaffoldPattern(
    name="bash",
    kind=DocumentKind.COMMAND,
    summary="Command gathering shell context before prompting",
    template="""---
description: {name} with shell command execution
allowed-tools: Bash(git:*), Bash(npm:*)
---

# {name}

## Context

- Current directory: !`pwd`
- Git status: !`git status`
- Git branch: !`git branch --show-current`

## Task

Execute the command based on the above context.
""",
)

FILES = ScaffoldPattern(
    name="files",
    kind=DocumentKind.COMMAND,
    summary="Command referencing project files with @path",
    template="""---
description: {name} that references project files
allowed-tools: Read, Write, Glob
---

# {name}

## Analysis

Analyze the implementation in @src/components/
Check the configuration in @package.json

## Task

Process the referenced files and execute the task.
""",
)

AGENT = ScaffoldPattern(
    name="agent",
    kind=DocumentKind.AGENT,
    summary="Sub-agent persona",
    template="""---
name: {name}
description: Use this agent when the task needs {name} expertise
tools: Read, Grep, Glob
model: sonnet
---

You are the {name} agent.

## Responsibilities

1. Describe what this agent is responsible for.
2. Describe how it reports results back.

## Constraints

- Stay within the task you were delegated.
""",
)

SKILL = ScaffoldPattern(
    name="skill",
    kind=DocumentKind.SKILL,
    summary="Skill guide document",
    template="""---
name: {name}
description: Guidance for {name}. Use when the task involves {name}.
---

# {name}

## When to use

Describe the situations this skill applies to.

## Instructions

1. Step one.
2. Step two.
""",
)

PATTERNS: dict[str, ScaffoldPattern] = {
    p.name: p for p in (SIMPLE, ARGS, POSITIONAL, BASH, FILES, AGENT, SKILL)
}


def list_patterns() -> list[ScaffoldPattern]:
    """Available patterns in definition order."""
    return list(PATTERNS.values())


def get_pattern(pattern: str) -> ScaffoldPattern:
    """Look up a pattern.

    Raises:
        TemplateError: If the pattern is unknown.
    """
    found = PATTERNS.get(pattern)
    if found is None:
        raise TemplateError(
            f"Unknown pattern: {pattern}. Available patterns: {', '.join(PATTERNS)}"
        )
    return found


def validate_name(name: str) -> None:
    """Check a document name.

    Raises:
        TemplateError: If the name is not a lowercase slug.
    """
    if not NAME_PATTERN.match(name):
        raise TemplateError(
            f"Invalid name: {name!r}. Names must start with a letter and "
            "contain only lowercase letters, numbers, and hyphens"
        )


def generate(pattern: str, name: str = DEFAULT_NAME) -> str:
    """Generate document text for a pattern."""
    validate_name(name)
    return get_pattern(pattern).render(name)


def target_path(pattern: str, name: str, directory: Path) -> Path:
    """File a pattern's document is written to.

    Skills are written as ``<directory>/<name>/SKILL.md``; everything
    else as ``<directory>/<name>.md``.
    """
    if get_pattern(pattern).kind == DocumentKind.SKILL:
        return directory / name / SKILL_ENTRY_FILE
    return directory / f"{name}{DOCUMENT_SUFFIX}"


def write(pattern: str, name: str, directory: Path, force: bool = False) -> Path:
    """Generate a document and write it to disk.

    Args:
        pattern: Pattern name.
        name: Document name.
        directory: Target directory.
        force: Overwrite an existing file.

    Returns:
        Path of the written file.

    Raises:
        TemplateError: On unknown pattern, invalid name, an existing
            file without ``force``, or a write failure.
    """
    content = generate(pattern, name)
    path = target_path(pattern, name, directory)

    if path.exists() and not force:
        raise TemplateError(f"File already exists: {path} (use --force to overwrite)")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise TemplateError(f"Failed to write {path}: {e}") from e

    logger.info("Generated %s from pattern %s", path, pattern)
    return path


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
