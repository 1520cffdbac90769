"""Configuration loader for Skill-Forge.

Loads settings from every source in precedence order, deep-merges them
and validates the result.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from skill_forge.config.models import SkillForgeConfig
from skill_forge.config.sources import (
    EnvironmentSource,
    IConfigSource,
    JsonFileSource,
    YamlFileSource,
)
from skill_forge.core import ConfigError, get_logger
from skill_forge.core.constants import SETTINGS_DIR_NAME

logger = get_logger("config.loader")


class ConfigLoader:
    """Configuration loader with hierarchical merging.

    Load order (later overrides earlier):
    1. Defaults (from SkillForgeConfig)
    2. User settings (~/.skillforge/settings.json or .yaml)
    3. Project settings (.skillforge/settings.json or .yaml)
    4. Local settings (.skillforge/settings.local.json)
    5. Environment variables (FORGE_*)
    """

    def __init__(
        self,
        user_dir: Path | None = None,
        project_dir: Path | None = None,
        environ: dict[str, str] | None = None,
    ) -> None:
        """Initialize configuration loader.

        Args:
            user_dir: User settings directory. Defaults to ~/.skillforge
            project_dir: Project settings directory. Defaults to ./.skillforge
            environ: Environment mapping. Defaults to os.environ.
        """
        self._user_dir = user_dir or Path.home() / SETTINGS_DIR_NAME
        self._project_dir = project_dir or Path.cwd() / SETTINGS_DIR_NAME
        self._environ = environ
        self._config: SkillForgeConfig | None = None

    @property
    def config(self) -> SkillForgeConfig:
        """Get current configuration, loading if necessary."""
        if self._config is None:
            self._config = self.load_all()
        return self._config

    @property
    def user_dir(self) -> Path:
        return self._user_dir

    @property
    def project_dir(self) -> Path:
        return self._project_dir

    def load_all(self) -> SkillForgeConfig:
        """Load and merge all configuration sources.

        Returns:
            Validated SkillForgeConfig with all sources merged.

        Raises:
            ConfigError: If the merged configuration does not validate.
        """
        config: dict[str, Any] = SkillForgeConfig().model_dump()

        for directory in (self._user_dir, self._project_dir):
            json_file = directory / "settings.json"
            yaml_file = directory / "settings.yaml"
            if json_file.exists():
                config = self._load_and_merge(config, JsonFileSource(json_file))
            elif yaml_file.exists():
                config = self._load_and_merge(config, YamlFileSource(yaml_file))

        local_json = self._project_dir / "settings.local.json"
        config = self._load_and_merge(config, JsonFileSource(local_json))

        config = self._load_and_merge(config, EnvironmentSource(self._environ))

        try:
            self._config = SkillForgeConfig.model_validate(config)
        except ValidationError as e:
            logger.error("Configuration validation failed: %s", e)
            raise ConfigError(f"Configuration validation failed: {e}") from e
        return self._config

    def _load_and_merge(
        self,
        base: dict[str, Any],
        source: IConfigSource,
    ) -> dict[str, Any]:
        try:
            if source.exists():
                override = source.load()
                if override:
                    logger.debug("Loaded config from %s", source)
                    return self.merge(base, override)
        except ConfigError as e:
            # A broken settings file must not take the tool down
            logger.warning("Skipped config source %s: %s", source, e)
        except FileNotFoundError:
            logger.debug("Config source %s disappeared before load", source)
        return base

    def merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two configuration dictionaries.

        Nested dictionaries are merged recursively; any other value is
        replaced by the override. Inputs are not modified.
        """
        result = copy.deepcopy(base)

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self.merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def validate(self, config: dict[str, Any]) -> tuple[bool, list[str]]:
        """Validate configuration against schema.

        Returns:
            Tuple of (is_valid, error_messages).
        """
        try:
            SkillForgeConfig.model_validate(config)
            return True, []
        except ValidationError as e:
            return False, [str(e)]
