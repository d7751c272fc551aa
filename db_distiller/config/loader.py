from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_SELECTED_STATUSES,
    DEFAULT_SESSION_TIMEOUT_SECONDS,
    DistillerConfig,
)

"""Config loader.

Responsibilities:
- Load YAML config (default config/distiller.yml)
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults (timeout=300s, selection=5 labels, output=./out)
- Environment override: DISTILLER_OWNER (.env で設定可) が YAML の owner より優先
"""

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "OWNER_ENV_VAR",
    "SCHEMA_PATH",
    "ConfigError",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/distiller.yml")
OWNER_ENV_VAR = "DISTILLER_OWNER"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: schema file missing / not valid JSON, or the data fails
            validation (missing required keys, wrong types, unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> DistillerConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    env_owner = os.getenv(OWNER_ENV_VAR)
    if env_owner:
        data = {**data, "owner": env_owner}

    _validate_config_schema(data)

    return DistillerConfig(
        owner=data["owner"],
        session_timeout_seconds=data.get("session_timeout_seconds", DEFAULT_SESSION_TIMEOUT_SECONDS),
        selected_statuses=tuple(data.get("selected_statuses", DEFAULT_SELECTED_STATUSES)),
        output_directory=data.get("output_directory", "./out"),
        pi_last_name=data.get("pi_last_name"),
    )
