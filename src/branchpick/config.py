"""XDG config loading."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from branchpick.errors import ConfigError
from branchpick.git.operations import DEFAULT_STASH_MESSAGE
from branchpick.matching.fuzzy_filter import DEFAULT_THRESHOLD
from branchpick.policy import DEFAULT_DOMINANCE

DEFAULT_CONFIG_PATH = Path("~/.config/branchpick/config.toml").expanduser()
DEFAULT_REMOTE = "origin"
DEFAULT_MAX_VISIBLE = 15
REMOTE_ENV = "BRANCHPICK_REMOTE"


class AppConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    remote: str = DEFAULT_REMOTE
    refresh_on_miss: bool = True
    stash_message: str = DEFAULT_STASH_MESSAGE
    filter_threshold: int = Field(default=DEFAULT_THRESHOLD, ge=0, le=100)
    max_visible: int = Field(default=DEFAULT_MAX_VISIBLE, ge=1)
    dominance: int = Field(default=DEFAULT_DOMINANCE, ge=1)

    @field_validator("remote", "stash_message")
    @classmethod
    def _validate_non_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Value must not be blank")
        return value.strip()


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _sanitize(raw: dict[str, object]) -> AppConfig:
    cfg = AppConfig()

    remote = raw.get("remote", cfg.remote)
    if isinstance(remote, str) and remote.strip():
        cfg.remote = remote

    refresh_on_miss = raw.get("refresh_on_miss", cfg.refresh_on_miss)
    if isinstance(refresh_on_miss, bool):
        cfg.refresh_on_miss = refresh_on_miss

    stash_message = raw.get("stash_message", cfg.stash_message)
    if isinstance(stash_message, str) and stash_message.strip():
        cfg.stash_message = stash_message

    filter_threshold = raw.get("filter_threshold", cfg.filter_threshold)
    if isinstance(filter_threshold, int) and not isinstance(filter_threshold, bool):
        if 0 <= filter_threshold <= 100:
            cfg.filter_threshold = filter_threshold

    max_visible = raw.get("max_visible", cfg.max_visible)
    if isinstance(max_visible, int) and not isinstance(max_visible, bool) and max_visible >= 1:
        cfg.max_visible = max_visible

    dominance = raw.get("dominance", cfg.dominance)
    if isinstance(dominance, int) and not isinstance(dominance, bool) and dominance >= 1:
        cfg.dominance = dominance

    return cfg


def _apply_env(cfg: AppConfig) -> AppConfig:
    env_remote = os.getenv(REMOTE_ENV, "").strip()
    if env_remote:
        cfg.remote = env_remote
    return cfg


def load_config(path: str | Path | None = None, *, required: bool = False) -> AppConfig:
    resolved = get_config_path(path)
    if not resolved.exists():
        if required:
            raise ConfigError(
                f"Config file not found: {resolved}",
                hint="Check the --config path or omit it to use defaults.",
            )
        return _apply_env(AppConfig())
    try:
        with resolved.open("rb") as handle:
            raw = tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError):
        return _apply_env(AppConfig())
    if not isinstance(raw, dict):
        return _apply_env(AppConfig())
    return _apply_env(_sanitize(raw))
