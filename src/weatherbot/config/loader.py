"""Config loader for YAML configuration files."""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from weatherbot.config.models import WeatherBotConfig
from weatherbot.core.errors import ConfigError

# ${NAME} or ${NAME:-default}
_ENV_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")


def expand_env(text: str) -> str:
    """Substitute ``${VAR}`` / ``${VAR:-default}`` references from the environment.

    Unset variables without a default expand to an empty string, which YAML
    reads as null.
    """

    def _replace(match: re.Match[str]) -> str:
        name, default = match.group(1), match.group(2)
        return os.environ.get(name, default if default is not None else "")

    return _ENV_PATTERN.sub(_replace, text)


class ConfigLoader:
    """Load WeatherBotConfig from YAML files."""

    DEFAULT_FILENAME = "weatherbot.yaml"

    @staticmethod
    def load(path: Path | str) -> WeatherBotConfig:
        """Load configuration from YAML file.

        Args:
            path: Path to a weatherbot.yaml file or a directory containing one

        Returns:
            Parsed WeatherBotConfig instance

        Raises:
            ConfigError: If the file is missing or its content is invalid
        """
        config_path = Path(path)
        if config_path.is_dir():
            config_path = config_path / ConfigLoader.DEFAULT_FILENAME

        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")

        text = expand_env(config_path.read_text(encoding="utf-8"))
        try:
            data: Any = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config root must be a mapping: {config_path}")

        try:
            return WeatherBotConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e
