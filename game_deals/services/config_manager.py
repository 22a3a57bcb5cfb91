"""
Configuration loading for the Game Deals engine.

A config file is YAML (or JSON) with one mapping per section: ``catalog``,
``currency``, ``cache``, ``display`` and ``logging``. Missing keys take the
dataclass defaults; a string value of exactly ``${NAME}`` is replaced by the
environment variable ``NAME``.
"""

import json
import os
import re
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..models.config import (
    CacheConfig,
    CatalogConfig,
    Configuration,
    CurrencyConfig,
    DisplayConfig,
    LoggingConfig,
)

SEARCH_PATHS = [
    "config/config.yaml",
    "config/config.yml",
    "config/config.json",
    "config.yaml",
    "config.yml",
    "config.json",
]
EXAMPLE_PATH = "config/config.example.yaml"

SECTIONS = {
    "catalog": CatalogConfig,
    "currency": CurrencyConfig,
    "cache": CacheConfig,
    "display": DisplayConfig,
    "logging": LoggingConfig,
}

ENV_REFERENCE = re.compile(r"\$\{(\w+)\}")


def find_config_file() -> str:
    """First existing file from SEARCH_PATHS, relative to the working directory."""
    for candidate in SEARCH_PATHS:
        if Path(candidate).is_file():
            return candidate

    if Path(EXAMPLE_PATH).is_file():
        hint = f"copy '{EXAMPLE_PATH}' to 'config/config.yaml' and edit it"
    else:
        hint = "create one of: " + ", ".join(SEARCH_PATHS)
    raise ValueError(f"No configuration file found; {hint}")


def expand_env(value: Any) -> Any:
    """Substitute ``${NAME}`` strings from the environment, recursively."""
    if isinstance(value, dict):
        return {key: expand_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env(item) for item in value]
    if isinstance(value, str):
        match = ENV_REFERENCE.fullmatch(value)
        if match:
            name = match.group(1)
            if name not in os.environ:
                raise ValueError(f"Environment variable '{name}' not found")
            return os.environ[name]
    return value


def build_configuration(raw: Dict[str, Any]) -> Configuration:
    """
    Build a Configuration from a parsed document.

    Null values fall back to defaults. Unknown sections and keys are
    rejected so that typos do not silently keep a default.
    """
    if not isinstance(raw, dict):
        raise ValueError("Configuration root must be a mapping")

    unknown = set(raw) - set(SECTIONS)
    if unknown:
        raise ValueError(f"Unknown configuration sections: {sorted(unknown)}")

    sections = {}
    for name, section_cls in SECTIONS.items():
        data = raw.get(name) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Section '{name}' must be a mapping")

        known = {f.name for f in fields(section_cls)}
        extra = set(data) - known
        if extra:
            raise ValueError(f"Unknown keys in '{name}': {sorted(extra)}")

        sections[name] = section_cls(**{k: v for k, v in data.items() if v is not None})

    return Configuration(**sections)


class ConfigurationManager:
    """Loads the configuration file and reloads it when it changes on disk."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Args:
            config_path: Config file; searched for in SEARCH_PATHS when None
        """
        self.config_path = config_path or find_config_file()
        self._config: Optional[Configuration] = None
        self._mtime: Optional[float] = None

    def _read(self) -> Any:
        text = Path(self.config_path).read_text(encoding="utf-8")
        if self.config_path.endswith(".json"):
            return json.loads(text) if text.strip() else {}
        return yaml.safe_load(text) or {}

    def load_config(self) -> Configuration:
        """
        Read, expand, build and validate the configuration file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: For unparseable files, unset environment
                references and invalid values.
        """
        path = Path(self.config_path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            config = build_configuration(expand_env(self._read()))
            config.validate()
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {self.config_path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {self.config_path}: {e}") from e
        except (TypeError, AttributeError, ValueError) as e:
            raise ValueError(f"Invalid configuration in {self.config_path}: {e}") from e

        self._config = config
        self._mtime = path.stat().st_mtime
        return config

    def get_config(self) -> Configuration:
        """Loaded configuration, reading the file on first use."""
        if self._config is None:
            return self.load_config()
        return self._config

    def reload_if_changed(self) -> bool:
        """
        Reload when the file's modification time has moved forward.

        A file that fails to load leaves the previous configuration in
        place and returns False.
        """
        path = Path(self.config_path)
        if not path.is_file():
            return False

        if self._mtime is not None and path.stat().st_mtime <= self._mtime:
            return False

        try:
            self.load_config()
        except ValueError:
            return False
        return True
