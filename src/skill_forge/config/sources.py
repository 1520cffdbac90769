"""Configuration sources for Skill-Forge.

Strategy objects that load configuration dictionaries from JSON files,
YAML files and environment variables.
"""

from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, ClassVar

import yaml

from skill_forge.core import ConfigError, get_logger

logger = get_logger("config.sources")


class IConfigSource(ABC):
    """Interface for configuration sources."""

    @abstractmethod
    def load(self) -> dict[str, Any]:
        """Load configuration from source.

        Returns:
            Configuration data, or an empty dict if the source is absent.

        Raises:
            ConfigError: If source exists but cannot be parsed.
        """
        ...

    @abstractmethod
    def exists(self) -> bool:
        """Check if source exists."""
        ...


class JsonFileSource(IConfigSource):
    """Load configuration from JSON file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> dict[str, Any]:
        if not self.exists():
            return {}

        try:
            content = self._path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Cannot read %s: %s", self._path, e)
            raise ConfigError(f"Cannot read {self._path}: {e}") from e

        if not content.strip():
            return {}
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning("Invalid JSON in %s: %s", self._path, e)
            raise ConfigError(f"Invalid JSON in {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"JSON root must be object, got {type(data).__name__}")
        return data

    def exists(self) -> bool:
        return self._path.is_file()

    @property
    def path(self) -> Path:
        return self._path

    def __repr__(self) -> str:
        return f"JsonFileSource({self._path})"


class YamlFileSource(IConfigSource):
    """Load configuration from YAML file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> dict[str, Any]:
        if not self.exists():
            return {}

        try:
            with self._path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.warning("Invalid YAML in %s: %s", self._path, e)
            raise ConfigError(f"Invalid YAML in {self._path}: {e}") from e
        except OSError as e:
            logger.warning("Cannot read %s: %s", self._path, e)
            raise ConfigError(f"Cannot read {self._path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"YAML root must be mapping, got {type(data).__name__}")
        return data

    def exists(self) -> bool:
        return self._path.is_file()

    @property
    def path(self) -> Path:
        return self._path

    def __repr__(self) -> str:
        return f"YamlFileSource({self._path})"


class EnvironmentSource(IConfigSource):
    """Load configuration from environment variables.

    - FORGE_USER_ROOT -> paths.user_root
    - FORGE_PROJECT_ROOT -> paths.project_root
    - FORGE_EXTRA_ROOTS -> paths.extra_roots (":" or ";" separated)
    - FORGE_STRICT -> lint.strict
    - FORGE_DISABLED_RULES -> lint.disabled_rules (comma separated)
    - FORGE_MAX_FILE_BYTES -> lint.max_file_bytes
    - FORGE_NO_COLOR -> display.color (inverted)
    - FORGE_JSON -> display.json_output
    """

    MAPPINGS: ClassVar[dict[str, tuple[str, str]]] = {
        "FORGE_USER_ROOT": ("paths", "user_root"),
        "FORGE_PROJECT_ROOT": ("paths", "project_root"),
        "FORGE_EXTRA_ROOTS": ("paths", "extra_roots"),
        "FORGE_STRICT": ("lint", "strict"),
        "FORGE_DISABLED_RULES": ("lint", "disabled_rules"),
        "FORGE_MAX_FILE_BYTES": ("lint", "max_file_bytes"),
        "FORGE_NO_COLOR": ("display", "color"),
        "FORGE_JSON": ("display", "json_output"),
    }

    BOOLEAN_KEYS: ClassVar[frozenset[str]] = frozenset({"strict", "color", "json_output"})
    INTEGER_KEYS: ClassVar[frozenset[str]] = frozenset({"max_file_bytes"})
    LIST_KEYS: ClassVar[frozenset[str]] = frozenset({"disabled_rules"})

    # Variables whose boolean meaning is the opposite of the config key
    INVERTED: ClassVar[frozenset[str]] = frozenset({"FORGE_NO_COLOR"})

    def __init__(self, environ: dict[str, str] | None = None) -> None:
        """Initialize environment source.

        Args:
            environ: Environment dictionary. Defaults to os.environ.
        """
        self._environ = environ if environ is not None else dict(os.environ)

    def load(self) -> dict[str, Any]:
        config: dict[str, Any] = {}

        for env_var, (section, key) in self.MAPPINGS.items():
            raw = self._environ.get(env_var)
            if raw is None:
                continue
            value = self._convert_value(raw, key)
            if env_var in self.INVERTED and isinstance(value, bool):
                value = not value
            config.setdefault(section, {})[key] = value

        return config

    def exists(self) -> bool:
        """Environment always exists."""
        return True

    def _convert_value(self, value: str, key: str) -> Any:
        if key in self.BOOLEAN_KEYS:
            return value.strip().lower() in ("true", "1", "yes", "on")

        if key in self.INTEGER_KEYS:
            try:
                return int(value)
            except ValueError:
                # Left as a string so validation reports it
                logger.warning("Invalid integer value for %s: %s", key, value)
                return value

        if key in self.LIST_KEYS:
            return [item.strip() for item in value.split(",") if item.strip()]

        return value

    def __repr__(self) -> str:
        return "EnvironmentSource()"
