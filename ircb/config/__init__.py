"""Configuration package exports."""

from .loader import build_config, env_overrides, load_config, load_raw
from .model import ConnectionConfig

__all__ = [
    "ConnectionConfig",
    "build_config",
    "env_overrides",
    "load_config",
    "load_raw",
]
