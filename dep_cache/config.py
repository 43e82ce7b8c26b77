"""Layered settings: defaults, optional YAML file, environment, then CLI flags."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from .cache import CACHE_DIR_ENV
from .errors import ConfigError
from .schema import Settings

CONFIG_ENV = "DEP_CACHE_CONFIG"
PREFIX_ENV = "PREFIX"


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Can't read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return data


def load_settings(
    config_file: Optional[Union[str, Path]] = None,
    symlink: Optional[bool] = None,
    force: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    env = os.environ if environ is None else environ
    values: Dict[str, Any] = {}

    config_file = config_file or env.get(CONFIG_ENV)
    if config_file:
        values.update(load_config_file(config_file))

    if env.get(CACHE_DIR_ENV):
        values["cache_dir"] = env[CACHE_DIR_ENV]
    if PREFIX_ENV in env:
        values["prefix"] = env[PREFIX_ENV]

    if symlink is not None:
        values["symlink"] = symlink
    values["force"] = force

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e


__all__ = ["load_settings", "load_config_file", "CONFIG_ENV", "PREFIX_ENV"]
