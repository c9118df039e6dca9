"""Configuration loading utilities (JSON file + environment overrides)."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..errors.internal import ConfigError
from ..logs.logger import logger
from .model import ConnectionConfig

# Environment variable -> config field
ENV_FIELDS: dict[str, str] = {
    "IRCB_HOST": "host",
    "IRCB_PORT": "port",
    "IRCB_SECURE": "secure",
    "IRCB_REJECT_UNAUTHORIZED": "reject_unauthorized",
    "IRCB_NICK": "nick",
    "IRCB_PASSWORD": "password",
    "IRCB_USERNAME": "username",
    "IRCB_REAL_NAME": "real_name",
    "IRCB_CHANNELS": "channels",
}


def load_raw(path: str | os.PathLike[str]) -> dict[str, Any]:
    """Read a JSON config file.

    A missing file yields an empty mapping. The file may hold the options
    directly or nested under a ``"connection"`` key.
    """
    config_path = Path(path)
    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.log_event("config", "missing", level=logging.WARNING, path=str(config_path))
        return {}
    except (OSError, ValueError) as e:
        raise ConfigError(f"Cannot read {config_path}: {e}", data={"path": str(config_path)}) from e
    if isinstance(data, Mapping) and isinstance(data.get("connection"), Mapping):
        data = data["connection"]
    if not isinstance(data, Mapping):
        raise ConfigError(f"{config_path} must contain a JSON object", data={"path": str(config_path)})
    logger.log_event("config", "loaded", level=logging.DEBUG, path=str(config_path))
    return dict(data)


def env_overrides(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect ``IRCB_*`` variables as config fields."""
    environ = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    for name, field in ENV_FIELDS.items():
        value = environ.get(name)
        if value is None or value == "":
            continue
        overrides[field] = value
        logger.log_event("config", "env_override", level=logging.DEBUG, field=field)
    return overrides


def build_config(*layers: Mapping[str, Any]) -> ConnectionConfig:
    """Merge option layers (later wins, ``None`` ignored) and validate."""
    merged: dict[str, Any] = {}
    for layer in layers:
        merged.update({k: v for k, v in layer.items() if v is not None})
    try:
        return ConnectionConfig.from_dict(merged)
    except ValidationError as e:
        logger.log_event("config", "invalid", level=logging.ERROR, error=str(e))
        raise ConfigError("Invalid connection configuration", data={"errors": e.errors()}) from e


def load_config(
    path: str | os.PathLike[str] | None = None,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ConnectionConfig:
    """Load a config from file, then environment, then explicit overrides."""
    file_values = load_raw(path) if path else {}
    return build_config(file_values, env_overrides(environ), overrides or {})
