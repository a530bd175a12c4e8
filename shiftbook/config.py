"""Configuration for shiftbook: where shifts are stored and chart defaults.

Sources, highest priority first:

1. ``CONFIG__{SECTION}__{KEY}`` environment variables, e.g.
   ``CONFIG__STORAGE__BACKEND=local`` or ``CONFIG__CHARTS__DAY_BUCKETS=14``
2. the YAML file named by ``--config`` / ``SHIFTBOOK_CONFIG``
   (default ``config/shiftbook.yml``, see ``config/shiftbook.example.yml``)
3. dedicated variables for values that should not live in a file:
   ``SHIFTBOOK_CLOUD_TOKEN`` and ``LOG_LEVEL``
4. the defaults below
"""

import os
from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .models import Period

DEFAULT_CONFIG_PATH = "config/shiftbook.yml"
ENV_PREFIX = "CONFIG"


# --- Storage Configs ---


class LocalStorageConfig(BaseModel):
    """JSON file used when no cloud service is configured."""

    path: str = "~/.shiftbook/storage.json"


class CloudStorageConfig(BaseModel):
    """Per-user HTTP key-value service.

    Enabled only when both ``base_url`` and ``user_id`` are set.
    """

    # Env overrides turn numeric ids into ints
    model_config = ConfigDict(coerce_numbers_to_str=True)

    base_url: str = ""
    token: str = ""  # from env: SHIFTBOOK_CLOUD_TOKEN
    user_id: str = ""  # namespace on the cloud side
    timeout_s: float = Field(default=10.0, gt=0)


class StorageConfig(BaseModel):
    """``backend``: ``auto`` picks cloud when enabled, else the local file.

    ``key`` names the item holding the whole shift collection.
    """

    backend: Literal["auto", "cloud", "local"] = "auto"
    key: str = "taxiShifts"
    local: LocalStorageConfig = LocalStorageConfig()
    cloud: CloudStorageConfig = CloudStorageConfig()


# --- Chart Config ---


class ChartConfig(BaseModel):
    """Default number of trailing buckets per chart period."""

    day_buckets: int = Field(default=7, ge=1)
    week_buckets: int = Field(default=4, ge=1)
    month_buckets: int = Field(default=6, ge=1)

    def length_for(self, period: Period) -> int:
        return {
            Period.DAY: self.day_buckets,
            Period.WEEK: self.week_buckets,
            Period.MONTH: self.month_buckets,
        }[Period(period)]


# --- Service Config ---


class ServiceConfig(BaseModel):
    storage: StorageConfig = StorageConfig()
    charts: ChartConfig = ChartConfig()
    log_level: str = "INFO"


def _coerce_env_value(value: str) -> Any:
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if value.isdigit():
        return int(value)
    return value


def _apply_env_overrides(config_dict: dict, prefix: str = ENV_PREFIX) -> dict:
    """Merge ``PREFIX__A__B=value`` variables into ``config_dict[a][b]``."""
    marker = f"{prefix}__"
    for name, value in os.environ.items():
        if not name.startswith(marker):
            continue
        *sections, leaf = name[len(marker):].lower().split("__")
        target = config_dict
        for section in sections:
            target = target.setdefault(section, {})
        target[leaf] = _coerce_env_value(value)
    return config_dict


def _apply_dedicated_env(config_dict: dict) -> dict:
    """Fill the cloud token and log level from their own variables if unset."""
    cloud = config_dict.setdefault("storage", {}).setdefault("cloud", {})
    if not cloud.get("token"):
        cloud["token"] = os.getenv("SHIFTBOOK_CLOUD_TOKEN", "")
    if "log_level" not in config_dict and os.getenv("LOG_LEVEL"):
        config_dict["log_level"] = os.environ["LOG_LEVEL"]
    return config_dict


def load_config(config_path: Optional[str] = None) -> ServiceConfig:
    """Build a validated ServiceConfig; a missing file means defaults."""
    path = Path(config_path or os.getenv("SHIFTBOOK_CONFIG", DEFAULT_CONFIG_PATH))
    config_dict: dict = {}
    if path.exists():
        with open(path) as f:
            config_dict = yaml.safe_load(f) or {}

    config_dict = _apply_env_overrides(config_dict)
    return ServiceConfig(**_apply_dedicated_env(config_dict))


_config: Optional[ServiceConfig] = None


def get_config() -> ServiceConfig:
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(config_path: Optional[str] = None) -> ServiceConfig:
    global _config
    _config = load_config(config_path)
    return _config
