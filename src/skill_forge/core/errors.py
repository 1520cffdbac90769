"""Exception hierarchy for Skill-Forge."""

from __future__ import annotations


class SkillForgeError(Exception):
    """Base class for all Skill-Forge errors."""


class ConfigError(SkillForgeError):
    """Configuration could not be loaded or validated."""


class FrontmatterError(SkillForgeError):
    """Frontmatter block is malformed.

    Attributes:
        line: 1-based line number where the problem was found, if known.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        super().__init__(message)


class DocumentError(SkillForgeError):
    """A prompt document could not be read or interpreted."""


class TemplateError(SkillForgeError):
    """A scaffold template could not be generated or written."""


class TaskListError(SkillForgeError):
    """A task checklist operation failed."""
