"""YAML config file discovery and Pydantic settings source."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from config.logging import get_logger

logger = get_logger("config")

CONFIG_ENV_VAR = "EMPATHOS_CONFIG"
CONFIG_NAMES = ("empathos.yaml", "empathos.yml")


def find_config_file() -> Path | None:
    """Find empathos.yaml using search order:
    1. EMPATHOS_CONFIG env var (explicit path, no fallback if it is missing)
    2. ./empathos.yaml, ./empathos.yml (CWD)
    3. ~/.empathos/empathos.yaml (user home)
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        p = Path(explicit).expanduser()
        return p if p.is_file() else None

    candidates = [Path.cwd() / name for name in CONFIG_NAMES]
    candidates.append(Path.home() / ".empathos" / CONFIG_NAMES[0])
    return next((c for c in candidates if c.is_file()), None)


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a YAML config file into top-level sections.

    An empty file yields no settings. A file whose top level is not a mapping,
    or that is not valid YAML, is a configuration error.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping of sections, got {type(data).__name__}")
    return data


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Load settings from the discovered YAML file, if any."""

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        self._yaml_data: dict[str, Any] = {}
        config_path = find_config_file()
        if config_path is not None:
            self._yaml_data = read_config_file(config_path)
            logger.debug(f"Loaded settings from {config_path}")

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        val = self._yaml_data.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return {k: v for k, v in self._yaml_data.items() if k in self.settings_cls.model_fields}
