"""
Validator configuration.

Loads settings from a YAML file.

YAML format:
```yaml
max_field_length: 1000
max_bytes: 104857600
```
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from .parser.errors import ConfigError

DEFAULT_MAX_FIELD_LENGTH = 1000
DEFAULT_MAX_BYTES = 100 * 1024 * 1024  # 100 MiB

CONFIG_ENV_VAR = "QPOOL_LINT_CONFIG"
MAX_BYTES_ENV_VAR = "QPOOL_LINT_MAX_BYTES"


class ValidatorConfig(BaseModel, frozen=True):
    """Settings for a validation run."""

    max_field_length: int = Field(
        default=DEFAULT_MAX_FIELD_LENGTH,
        ge=1,
        description="Maximum number of characters in a field value",
    )
    max_bytes: int | None = Field(
        default=None,
        description="Maximum input size in bytes (None or 0 = unlimited)",
    )

    model_config = {"frozen": True, "extra": "forbid"}


def load_config(path: Path | str | None = None) -> ValidatorConfig:
    """
    Load validator configuration.

    Args:
        path: YAML config file. Falls back to $QPOOL_LINT_CONFIG, then defaults.

    Returns:
        ValidatorConfig

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or has invalid values
    """
    if path is None:
        env_value = os.environ.get(CONFIG_ENV_VAR)
        if not env_value:
            return ValidatorConfig()
        path = env_value

    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    return _parse_config(data, source=str(path))


def _parse_config(data: dict[str, Any], source: str) -> ValidatorConfig:
    """Build a ValidatorConfig from parsed YAML data."""
    try:
        return ValidatorConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {source}: {e}") from e


def resolve_max_bytes(max_bytes: int | None, config: ValidatorConfig | None = None) -> int | None:
    """
    Resolve the input size limit.

    Priority: explicit value, config file, $QPOOL_LINT_MAX_BYTES, 100 MiB default.
    A value <= 0 means unlimited (None).
    """
    if max_bytes is not None:
        return None if max_bytes <= 0 else max_bytes

    if config is not None and config.max_bytes is not None:
        return None if config.max_bytes <= 0 else config.max_bytes

    env_value = os.environ.get(MAX_BYTES_ENV_VAR)
    if env_value:
        try:
            parsed = int(env_value)
        except ValueError:
            raise ConfigError(f"{MAX_BYTES_ENV_VAR} must be an integer") from None
        return None if parsed <= 0 else parsed

    return DEFAULT_MAX_BYTES
