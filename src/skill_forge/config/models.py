"""Configuration models for Skill-Forge.

Pydantic models for every configuration section, with validation
and defaults.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from skill_forge.core.constants import HOST_DIR_NAME, MAX_DOCUMENT_BYTES

RULE_CODE_PATTERN = re.compile(r"^[A-Z]{2}\d{3}$")


class PathsConfig(BaseModel):
    """Where prompt documents are discovered.

    Attributes:
        user_root: User-level host directory.
        project_root: Project-level host directory.
        extra_roots: Additional host directories, searched after the project.
    """

    model_config = ConfigDict(validate_assignment=True)

    user_root: Path = Field(default_factory=lambda: Path.home() / HOST_DIR_NAME)
    project_root: Path = Field(default_factory=lambda: Path.cwd() / HOST_DIR_NAME)
    extra_roots: list[Path] = Field(default_factory=list)

    @field_validator("extra_roots", mode="before")
    @classmethod
    def split_roots(cls, v: object) -> object:
        """Accept a path-separator joined string as well as a list."""
        if isinstance(v, str):
            return [p for p in re.split(r"[:;]", v) if p.strip()]
        return v


class LintConfig(BaseModel):
    """Linter configuration.

    Attributes:
        strict: Treat warnings as failures.
        disabled_rules: Rule codes that are never reported.
        max_file_bytes: Documents larger than this are skipped.
    """

    model_config = ConfigDict(validate_assignment=True)

    strict: bool = False
    disabled_rules: list[str] = Field(default_factory=list)
    max_file_bytes: int = Field(default=MAX_DOCUMENT_BYTES, ge=1)

    @field_validator("disabled_rules")
    @classmethod
    def validate_rule_codes(cls, v: list[str]) -> list[str]:
        """Normalize and check rule codes."""
        codes = [code.strip().upper() for code in v if code.strip()]
        for code in codes:
            if not RULE_CODE_PATTERN.match(code):
                raise ValueError(f"Invalid rule code: {code}")
        return codes


class DisplayConfig(BaseModel):
    """Output configuration.

    Attributes:
        color: Use colored terminal output.
        json_output: Emit JSON instead of formatted text.
    """

    model_config = ConfigDict(validate_assignment=True)

    color: bool = True
    json_output: bool = False


class SkillForgeConfig(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(validate_assignment=True)

    paths: PathsConfig = Field(default_factory=PathsConfig)
    lint: LintConfig = Field(default_factory=LintConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
