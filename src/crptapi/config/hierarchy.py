"""Configuration hierarchy — merges sources in priority order.

Precedence (later overrides earlier):
  1. Package defaults
  2. Global config   (~/.crptapi/config.yaml)
  3. Project config   (./crptapi.yaml)
  4. Environment variables (CRPT_*)
  5. Runtime arguments
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from crptapi.config.defaults import get_defaults
from crptapi.errors.exceptions import Misconfiguration
from crptapi.types import TimeUnit

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".crptapi" / "config.yaml"
_PROJECT_CONFIG_NAME = "crptapi.yaml"

# Map of environment variables to config keys
_ENV_MAP: dict[str, str] = {
    "CRPT_API_URL": "api_url",
    "CRPT_TIMEOUT": "timeout",
    "CRPT_TIME_UNIT": "time_unit",
    "CRPT_REQUEST_LIMIT": "request_limit",
    "CRPT_LOG_LEVEL": "log_level",
    "CRPT_DOC_ID": "doc_id",
    "CRPT_DOC_STATUS": "doc_status",
    "CRPT_IMPORT_REQUEST": "import_request",
    "CRPT_OWNER_INN": "owner_inn",
    "CRPT_PARTICIPANT_INN": "participant_inn",
    "CRPT_PRODUCER_INN": "producer_inn",
    "CRPT_PRODUCTION_DATE": "production_date",
    "CRPT_PRODUCTION_TYPE": "production_type",
    "CRPT_REG_DATE": "reg_date",
    "CRPT_REG_NUMBER": "reg_number",
}

# Keys that should be parsed as specific types
_TYPE_MAP: dict[str, type] = {
    "timeout": float,
    "request_limit": int,
}

_BOOL_KEYS = {"import_request"}

# Boolean env var values
_TRUTHY = {"1", "true", "yes", "on"}


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Load and merge configuration from all sources.

    Returns a merged dict with the final resolved values. ``time_unit`` is
    normalized to a TimeUnit; an unknown unit raises Misconfiguration here
    rather than when the rate limiter is built.
    """
    config = get_defaults()

    # Layer 2: Global config
    global_cfg = _load_yaml_config(_GLOBAL_CONFIG_PATH)
    if global_cfg:
        config.update(global_cfg)

    # Layer 3: Project config (search from cwd upward)
    project_path = _find_project_config()
    if project_path:
        project_cfg = _load_yaml_config(project_path)
        if project_cfg:
            config.update(project_cfg)

    # Layer 4: Environment variables
    config.update(_load_env_vars())

    # Layer 5: Runtime arguments, only when explicitly set
    for key, value in runtime_overrides.items():
        if value is not None:
            config[key] = value

    config["time_unit"] = _resolve_time_unit(config["time_unit"])
    return config


def _resolve_time_unit(value: Any) -> TimeUnit:
    """Accept a TimeUnit or its name in any case, e.g. "MINUTES"."""
    try:
        return TimeUnit(str(value).strip().lower())
    except ValueError:
        raise Misconfiguration(
            f"Unknown time unit {value!r}; expected one of "
            f"{', '.join(u.value for u in TimeUnit)}",
            setting="time_unit",
        ) from None


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Load a YAML config file if it exists."""
    if not path.exists() or not path.is_file():
        return None
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
        if isinstance(data, dict):
            return data
        logger.warning("Config file %s is not a mapping, ignoring", path)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
    return None


def _find_project_config() -> Path | None:
    """Search for crptapi.yaml from cwd upward."""
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / _PROJECT_CONFIG_NAME
        if candidate.exists():
            return candidate
    return None


def _load_env_vars() -> dict[str, Any]:
    """Read CRPT_* environment variables."""
    result: dict[str, Any] = {}
    for env_key, config_key in _ENV_MAP.items():
        value = os.environ.get(env_key)
        if value is None:
            continue
        result[config_key] = _coerce_env_value(config_key, value)
    return result


def _coerce_env_value(key: str, value: str) -> Any:
    """Coerce an environment variable string to the appropriate type."""
    if key in _BOOL_KEYS:
        return value.strip().lower() in _TRUTHY

    target_type = _TYPE_MAP.get(key)
    if target_type:
        try:
            return target_type(value)
        except (ValueError, TypeError):
            logger.warning(
                "Cannot convert env var for '%s' to %s: %s", key, target_type.__name__, value
            )
            return value

    return value
