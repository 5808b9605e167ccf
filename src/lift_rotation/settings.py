"""
YAML + environment settings loader.

Resolution order (later overrides earlier):
1. Built-in defaults
2. User file at ~/.lift-rotation/config.yaml
3. Environment variables (LIFT_ROTATION_DATA_DIR, LIFT_ROTATION_USER,
   LIFT_ROTATION_UNIT; DATA_DIR is honoured as a fallback for the data
   directory)
4. Explicit overrides passed by the caller (CLI options)

Usage:
    from lift_rotation.settings import load_settings
    settings = load_settings(unit="lbs")
    store = HistoryStore(settings.data_dir)

If the user file cannot be parsed, a warning is emitted and the file is
ignored.
"""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from .core.config import DEFAULT_UNIT
from .io.serializers import ValidationError, validate_unit

DEFAULT_USER = "local"

_ENV_DATA_DIR = "LIFT_ROTATION_DATA_DIR"
_ENV_LEGACY_DATA_DIR = "DATA_DIR"
_ENV_USER = "LIFT_ROTATION_USER"
_ENV_UNIT = "LIFT_ROTATION_UNIT"


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    data_dir: Path
    default_user: str = DEFAULT_USER
    unit: str = DEFAULT_UNIT


def get_home_dir() -> Path:
    """Return ~/.lift-rotation (not created)."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    return home / ".lift-rotation"


def get_user_config_path() -> Path | None:
    """Return ~/.lift-rotation/config.yaml if it exists, else None."""
    p = get_home_dir() / "config.yaml"
    return p if p.exists() else None


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML mapping; warn and return {} if it cannot be parsed."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"lift-rotation: ignoring {path} ({exc})", stacklevel=2)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        warnings.warn(f"lift-rotation: ignoring {path} (not a mapping)", stacklevel=2)
        return {}
    return data


def _apply(settings: Settings, values: dict[str, Any]) -> Settings:
    """Return settings updated with the non-empty entries of values."""
    changes: dict[str, Any] = {}
    if values.get("data_dir"):
        changes["data_dir"] = Path(str(values["data_dir"])).expanduser()
    if values.get("default_user"):
        changes["default_user"] = str(values["default_user"])
    if values.get("unit"):
        changes["unit"] = validate_unit(str(values["unit"]))
    return replace(settings, **changes) if changes else settings


def load_settings(
    data_dir: str | Path | None = None,
    user: str | None = None,
    unit: str | None = None,
) -> Settings:
    """
    Load and merge settings from all sources.

    Args:
        data_dir: Explicit data directory override
        user: Explicit identity override
        unit: Explicit display unit override

    Returns:
        Resolved Settings

    Raises:
        ValidationError: If a unit value is not "kg" or "lbs"
    """
    settings = Settings(data_dir=get_home_dir() / "data")

    config_path = get_user_config_path()
    if config_path is not None:
        try:
            settings = _apply(settings, _load_yaml_file(config_path))
        except ValidationError as exc:
            raise ValidationError(f"{config_path}: {exc}") from exc

    settings = _apply(
        settings,
        {
            "data_dir": os.environ.get(_ENV_DATA_DIR) or os.environ.get(_ENV_LEGACY_DATA_DIR),
            "default_user": os.environ.get(_ENV_USER),
            "unit": os.environ.get(_ENV_UNIT),
        },
    )

    return _apply(settings, {"data_dir": data_dir, "default_user": user, "unit": unit})
