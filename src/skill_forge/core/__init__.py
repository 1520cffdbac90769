"""Core package containing errors, constants and logging."""

from skill_forge.core.errors import (
    ConfigError,
    DocumentError,
    FrontmatterError,
    SkillForgeError,
    TaskListError,
    TemplateError,
)
from skill_forge.core.logging import get_logger, setup_logging

__all__ = [
    "ConfigError",
    "DocumentError",
    "FrontmatterError",
    "SkillForgeError",
    "TaskListError",
    "TemplateError",
    "get_logger",
    "setup_logging",
]
