"""Tests for configuration models."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from skill_forge.config import (
    DisplayConfig,
    LintConfig,
    PathsConfig,
    SkillForgeConfig,
)
from skill_forge.core.constants import MAX_DOCUMENT_BYTES


class TestPathsConfig:
    """Tests for PathsConfig."""

    def test_defaults(self, isolated_env: Path) -> None:
        """User and project roots point at .claude directories."""
        config = PathsConfig()
        assert config.user_root == Path.home() / ".claude"
        assert config.project_root == Path.cwd() / ".claude"
        assert config.extra_roots == []

    def test_extra_roots_from_string(self) -> None:
        """A separator joined string is split into paths."""
        config = PathsConfig(extra_roots="/a:/b;/c")
        assert config.extra_roots == [Path("/a"), Path("/b"), Path("/c")]

    def test_extra_roots_from_list(self) -> None:
        """Test extra roots from list."""
        config = PathsConfig(extra_roots=["/a", "/b"])
        assert config.extra_roots == [Path("/a"), Path("/b")]


class TestLintConfig:
    """Tests for LintConfig."""

    def test_defaults(self) -> None:
        """Test defaults."""
        config = LintConfig()
        assert config.strict is False
        assert config.disabled_rules == []
        assert config.max_file_bytes == MAX_DOCUMENT_BYTES

    def test_rule_codes_normalized(self) -> None:
        """Rule codes are stripped and upper-cased."""
        config = LintConfig(disabled_rules=[" ar003", "FM004", ""])
        assert config.disabled_rules == ["AR003", "FM004"]

    def test_invalid_rule_code(self) -> None:
        """Test invalid rule code."""
        with pytest.raises(ValidationError):
            LintConfig(disabled_rules=["not-a-rule"])

    def test_max_file_bytes_positive(self) -> None:
        """Test max file bytes positive."""
        with pytest.raises(ValidationError):
            LintConfig(max_file_bytes=0)

    def test_validate_assignment(self) -> None:
        """Assignments are validated."""
        config = LintConfig()
        with pytest.raises(ValidationError):
            config.max_file_bytes = -1


class TestSkillForgeConfig:
    """Tests for the root model."""

    def test_sections(self) -> None:
        """Test sections."""
        config = SkillForgeConfig()
        assert isinstance(config.paths, PathsConfig)
        assert isinstance(config.lint, LintConfig)
        assert isinstance(config.display, DisplayConfig)
        assert config.display.color is True
        assert config.display.json_output is False

    def test_from_dict(self) -> None:
        """Test from dict."""
        config = SkillForgeConfig.model_validate(
            {"lint": {"strict": True}, "display": {"color": False}}
        )
        assert config.lint.strict is True
        assert config.display.color is False
