"""
Configuration loader — reads upkeep.yml into the Config model.

Reads YAML, validates against the Pydantic schema and returns a typed
``Config``. A missing file is not an error: every key has a default.
CLI flags are merged on top with :func:`apply_overrides`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from upkeep.core.environment import HostEnvironment
from upkeep.core.errors import ConfigError
from upkeep.core.models.config import Config

logger = logging.getLogger(__name__)

CONFIG_FILE = "upkeep.yml"
CONFIG_ENV_VAR = "UPKEEP_CONFIG"

_EXAMPLE_CONFIG = Path(__file__).parent.parent / "data" / "upkeep.example.yml"

# List options that CLI flags extend rather than replace
_LIST_KEYS = ("only", "disable", "custom_commands")


def default_config_path(environment: HostEnvironment) -> Path:
    """Where ``config edit`` creates the file when none exists yet."""
    return environment.config_dir / "upkeep" / CONFIG_FILE


def config_search_paths(environment: HostEnvironment) -> list[Path]:
    """Candidate config files, highest precedence first."""
    paths = []
    if os.environ.get(CONFIG_ENV_VAR):
        paths.append(Path(os.environ[CONFIG_ENV_VAR]).expanduser())
    paths.append(default_config_path(environment))
    paths.append(environment.home_dir / f".{CONFIG_FILE}")
    return paths


def find_config_file(environment: HostEnvironment) -> Path | None:
    """First existing config file, or None."""
    for candidate in config_search_paths(environment):
        if candidate.is_file():
            return candidate
    return None


def load_config(
    path: Path | None = None,
    environment: HostEnvironment | None = None,
) -> Config:
    """Load and validate the configuration.

    Args:
        path: Explicit config path (``--config``). Must exist.
        environment: Host used to locate the default file.

    Returns:
        Validated Config. Defaults if no file was found.

    Raises:
        ConfigError: If the file is missing (explicit path) or invalid.
    """
    if path is None:
        path = find_config_file(environment or HostEnvironment.detect())
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return Config()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded config from %s", path)
    return config


def apply_overrides(config: Config, **overrides: Any) -> Config:
    """Merge CLI options into a config.

    ``None`` and ``False`` / empty values mean "flag not given" and leave
    the config untouched. List options extend the configured lists;
    ``env`` entries are merged key by key.
    """
    update: dict[str, Any] = {}
    for key, value in overrides.items():
        if value is None or value is False or value == () or value == [] or value == {}:
            continue
        if key in _LIST_KEYS:
            update[key] = [*getattr(config, key), *value]
        elif key == "env":
            update[key] = {**config.env, **value}
        else:
            update[key] = value

    if not update:
        return config
    try:
        return Config.model_validate({**config.model_dump(), **update})
    except ValidationError as e:
        raise ConfigError(f"Invalid option: {e}") from e


def apply_environment(config: Config, environ: MutableMapping[str, str] | None = None) -> None:
    """Export the ``env`` mapping into the process environment."""
    target = os.environ if environ is None else environ
    for key, value in config.env.items():
        logger.debug("Setting %s from config", key)
        target[key] = value


def parse_env_assignments(assignments: tuple[str, ...] | list[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` strings from ``--env``."""
    env = {}
    for item in assignments:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ConfigError(f"Invalid --env value {item!r}, expected KEY=VALUE")
        env[key] = value
    return env


def example_config() -> str:
    """The annotated example configuration shipped with upkeep."""
    return _EXAMPLE_CONFIG.read_text(encoding="utf-8")
