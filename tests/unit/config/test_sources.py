"""Tests for configuration sources."""

from __future__ import annotations

from pathlib import Path

import pytest

from skill_forge.config import EnvironmentSource, JsonFileSource, YamlFileSource
from skill_forge.core import ConfigError


class TestJsonFileSource:
    """Tests for JsonFileSource."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file yields an empty dict."""
        source = JsonFileSource(tmp_path / "missing.json")
        assert not source.exists()
        assert source.load() == {}

    def test_load(self, tmp_path: Path) -> None:
        """Test loading a source."""
        path = tmp_path / "settings.json"
        path.write_text('{"lint": {"strict": true}}')
        assert JsonFileSource(path).load() == {"lint": {"strict": True}}

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test empty file."""
        path = tmp_path / "settings.json"
        path.write_text("  \n")
        assert JsonFileSource(path).load() == {}

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test invalid JSON."""
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            JsonFileSource(path).load()

    def test_non_object_root(self, tmp_path: Path) -> None:
        """Test non object root."""
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError):
            JsonFileSource(path).load()


class TestYamlFileSource:
    """Tests for YamlFileSource."""

    def test_load(self, tmp_path: Path) -> None:
        """Test loading a source."""
        path = tmp_path / "settings.yaml"
        path.write_text("lint:\n  disabled_rules:\n    - AR003\n")
        assert YamlFileSource(path).load() == {"lint": {"disabled_rules": ["AR003"]}}

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test invalid YAML."""
        path = tmp_path / "settings.yaml"
        path.write_text("lint: [unclosed")
        with pytest.raises(ConfigError):
            YamlFileSource(path).load()

    def test_non_mapping_root(self, tmp_path: Path) -> None:
        """Test non mapping root."""
        path = tmp_path / "settings.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            YamlFileSource(path).load()


class TestEnvironmentSource:
    """Tests for EnvironmentSource."""

    def test_empty_environment(self) -> None:
        """Test empty environment."""
        assert EnvironmentSource({}).load() == {}

    def test_ignores_unrelated_variables(self) -> None:
        """Test ignores unrelated variables."""
        assert EnvironmentSource({"PATH": "/bin"}).load() == {}

    def test_paths(self) -> None:
        """Test paths."""
        config = EnvironmentSource(
            {"FORGE_USER_ROOT": "/u", "FORGE_EXTRA_ROOTS": "/a:/b"}
        ).load()
        assert config["paths"] == {"user_root": "/u", "extra_roots": "/a:/b"}

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("true", True), ("1", True), ("YES", True), ("false", False), ("0", False)],
    )
    def test_boolean(self, raw: str, expected: bool) -> None:
        """Test boolean."""
        config = EnvironmentSource({"FORGE_STRICT": raw}).load()
        assert config["lint"]["strict"] is expected

    def test_no_color_inverted(self) -> None:
        """FORGE_NO_COLOR=1 turns color off."""
        config = EnvironmentSource({"FORGE_NO_COLOR": "1"}).load()
        assert config["display"]["color"] is False

    def test_integer(self) -> None:
        """Test integer."""
        config = EnvironmentSource({"FORGE_MAX_FILE_BYTES": "2048"}).load()
        assert config["lint"]["max_file_bytes"] == 2048

    def test_invalid_integer_kept_as_string(self) -> None:
        """Invalid integers are passed through for validation to reject."""
        config = EnvironmentSource({"FORGE_MAX_FILE_BYTES": "lots"}).load()
        assert config["lint"]["max_file_bytes"] == "lots"

    def test_comma_list(self) -> None:
        """Test comma list."""
        config = EnvironmentSource({"FORGE_DISABLED_RULES": "AR003, FM004,"}).load()
        assert config["lint"]["disabled_rules"] == ["AR003", "FM004"]
