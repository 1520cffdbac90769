"""Tests for configuration loader."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from skill_forge.config import ConfigLoader, SkillForgeConfig
from skill_forge.core import ConfigError


@pytest.fixture
def dirs(tmp_path: Path) -> tuple[Path, Path]:
    """User and project settings directories."""
    user_dir = tmp_path / "user"
    project_dir = tmp_path / "project"
    user_dir.mkdir()
    project_dir.mkdir()
    return user_dir, project_dir


class TestConfigLoaderInit:
    """Tests for ConfigLoader initialization."""

    def test_default_directories(self, isolated_env: Path) -> None:
        """Settings live in ~/.skillforge and ./.skillforge."""
        loader = ConfigLoader()
        assert loader.user_dir == Path.home() / ".skillforge"
        assert loader.project_dir == Path.cwd() / ".skillforge"

    def test_custom_directories(self, dirs: tuple[Path, Path]) -> None:
        """Test custom directories."""
        user_dir, project_dir = dirs
        loader = ConfigLoader(user_dir=user_dir, project_dir=project_dir)
        assert loader.user_dir == user_dir
        assert loader.project_dir == project_dir


class TestConfigLoaderLoadAll:
    """Tests for ConfigLoader.load_all()."""

    def test_defaults_only(self, dirs: tuple[Path, Path]) -> None:
        """No files and no environment yields defaults."""
        user_dir, project_dir = dirs
        config = ConfigLoader(user_dir, project_dir, environ={}).load_all()
        assert config.lint.strict is False
        assert config.display.color is True

    def test_user_json(self, dirs: tuple[Path, Path]) -> None:
        """Test user JSON."""
        user_dir, project_dir = dirs
        (user_dir / "settings.json").write_text('{"lint": {"strict": true}}')
        config = ConfigLoader(user_dir, project_dir, environ={}).load_all()
        assert config.lint.strict is True

    def test_user_yaml(self, dirs: tuple[Path, Path]) -> None:
        """Test user YAML."""
        user_dir, project_dir = dirs
        (user_dir / "settings.yaml").write_text("display:\n  json_output: true\n")
        config = ConfigLoader(user_dir, project_dir, environ={}).load_all()
        assert config.display.json_output is True

    def test_project_overrides_user(self, dirs: tuple[Path, Path]) -> None:
        """Test project overrides user."""
        user_dir, project_dir = dirs
        (user_dir / "settings.json").write_text(
            json.dumps({"lint": {"strict": True, "disabled_rules": ["AR003"]}})
        )
        (project_dir / "settings.json").write_text(json.dumps({"lint": {"strict": False}}))
        config = ConfigLoader(user_dir, project_dir, environ={}).load_all()

        assert config.lint.strict is False
        # Sibling keys from the user file survive the deep merge
        assert config.lint.disabled_rules == ["AR003"]

    def test_local_overrides_project(self, dirs: tuple[Path, Path]) -> None:
        """Test local overrides project."""
        user_dir, project_dir = dirs
        (project_dir / "settings.json").write_text('{"lint": {"max_file_bytes": 100}}')
        (project_dir / "settings.local.json").write_text('{"lint": {"max_file_bytes": 200}}')
        config = ConfigLoader(user_dir, project_dir, environ={}).load_all()
        assert config.lint.max_file_bytes == 200

    def test_environment_overrides_files(self, dirs: tuple[Path, Path]) -> None:
        """Test environment overrides files."""
        user_dir, project_dir = dirs
        (project_dir / "settings.json").write_text('{"lint": {"strict": false}}')
        config = ConfigLoader(
            user_dir, project_dir, environ={"FORGE_STRICT": "1", "FORGE_NO_COLOR": "1"}
        ).load_all()
        assert config.lint.strict is True
        assert config.display.color is False

    def test_extra_roots_from_environment(self, dirs: tuple[Path, Path]) -> None:
        """Test extra roots from environment."""
        user_dir, project_dir = dirs
        config = ConfigLoader(
            user_dir, project_dir, environ={"FORGE_EXTRA_ROOTS": "/a:/b"}
        ).load_all()
        assert config.paths.extra_roots == [Path("/a"), Path("/b")]

    def test_invalid_file_skipped(self, dirs: tuple[Path, Path]) -> None:
        """A broken settings file is logged and skipped."""
        user_dir, project_dir = dirs
        (user_dir / "settings.json").write_text("{broken")
        (project_dir / "settings.json").write_text('{"lint": {"strict": true}}')
        config = ConfigLoader(user_dir, project_dir, environ={}).load_all()
        assert config.lint.strict is True

    def test_validation_failure_raises(self, dirs: tuple[Path, Path]) -> None:
        """Test validation failure raises."""
        user_dir, project_dir = dirs
        with pytest.raises(ConfigError):
            ConfigLoader(
                user_dir, project_dir, environ={"FORGE_MAX_FILE_BYTES": "lots"}
            ).load_all()

    def test_config_property_caches(self, dirs: tuple[Path, Path]) -> None:
        """Test config property caches."""
        user_dir, project_dir = dirs
        loader = ConfigLoader(user_dir, project_dir, environ={})
        assert loader.config is loader.config
        assert isinstance(loader.config, SkillForgeConfig)


class TestConfigLoaderMerge:
    """Tests for merge and validate."""

    def test_merge_is_deep(self) -> None:
        """Test merge is deep."""
        loader = ConfigLoader()
        base = {"lint": {"strict": False, "max_file_bytes": 10}}
        result = loader.merge(base, {"lint": {"strict": True}})
        assert result == {"lint": {"strict": True, "max_file_bytes": 10}}

    def test_merge_does_not_modify_inputs(self) -> None:
        """Test merge does not modify inputs."""
        loader = ConfigLoader()
        base = {"lint": {"disabled_rules": ["AR003"]}}
        override = {"lint": {"strict": True}}
        loader.merge(base, override)
        assert base == {"lint": {"disabled_rules": ["AR003"]}}
        assert override == {"lint": {"strict": True}}

    def test_validate(self) -> None:
        """Test validate."""
        loader = ConfigLoader()
        assert loader.validate({"lint": {"strict": True}}) == (True, [])
        ok, errors = loader.validate({"lint": {"max_file_bytes": 0}})
        assert not ok
        assert errors
