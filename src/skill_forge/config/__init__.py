"""Configuration system for Skill-Forge."""

from skill_forge.config.loader import ConfigLoader
from skill_forge.config.models import (
    DisplayConfig,
    LintConfig,
    PathsConfig,
    SkillForgeConfig,
)
from skill_forge.config.sources import (
    EnvironmentSource,
    IConfigSource,
    JsonFileSource,
    YamlFileSource,
)

__all__ = [
    "ConfigLoader",
    "DisplayConfig",
    "EnvironmentSource",
    "IConfigSource",
    "JsonFileSource",
    "LintConfig",
    "PathsConfig",
    "SkillForgeConfig",
    "YamlFileSource",
]
