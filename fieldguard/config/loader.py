"""Layered TOML configuration.

Layers, lowest precedence first:

1. config/default.toml
2. config/{FIELDGUARD_ENV}.toml
3. the file named by FIELDGUARD_CONFIG_FILE (deployment-local overrides)

The first two are optional since every setting has a model default. A
FIELDGUARD_CONFIG_FILE that does not exist is an error.
"""

import os
import tomllib
from functools import reduce
from pathlib import Path
from typing import Any

ENV_VAR_CONFIG_DIR = "FIELDGUARD_CONFIG_DIR"
ENV_VAR_ENVIRONMENT = "FIELDGUARD_ENV"
ENV_VAR_CONFIG_FILE = "FIELDGUARD_CONFIG_FILE"

DEFAULT_ENVIRONMENT = "development"
SEARCH_DEPTH = 5


def get_config_dir() -> Path:
    """Directory holding default.toml and the per-environment files.

    FIELDGUARD_CONFIG_DIR wins and must exist. Otherwise the nearest
    config/ directory at or above the working directory, else ./config.
    """
    override = os.environ.get(ENV_VAR_CONFIG_DIR)
    if override:
        path = Path(override)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {override}")
        return path

    cwd = Path.cwd()
    for base in (cwd, *cwd.parents)[:SEARCH_DEPTH]:
        if (base / "config").is_dir():
            return base / "config"
    return Path("config")


def get_environment() -> str:
    return os.environ.get(ENV_VAR_ENVIRONMENT, DEFAULT_ENVIRONMENT)


def config_layers(
    config_dir: Path | None = None,
    environment: str | None = None,
) -> list[Path]:
    """Existing config files in merge order."""
    config_dir = config_dir or get_config_dir()
    environment = environment or get_environment()

    layers = [
        path
        for path in (config_dir / "default.toml", config_dir / f"{environment}.toml")
        if path.is_file()
    ]
    local = os.environ.get(ENV_VAR_CONFIG_FILE)
    if local:
        local_path = Path(local)
        if not local_path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {local}")
        layers.append(local_path)
    return layers


def load_toml(file_path: Path) -> dict[str, Any]:
    """Parse one TOML file.

    Raises:
        FileNotFoundError: the file does not exist
        tomllib.TOMLDecodeError: the file is not valid TOML
    """
    return tomllib.loads(file_path.read_text(encoding="utf-8"))


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base; tables merge, everything else replaces."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = deep_merge(current, value)
        merged[key] = value
    return merged


def load_config(
    config_dir: Path | None = None,
    environment: str | None = None,
) -> dict[str, Any]:
    """Merge every config layer into one dict for the settings source."""
    layers = config_layers(config_dir, environment)
    return reduce(deep_merge, (load_toml(path) for path in layers), {})
