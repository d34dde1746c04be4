"""Settings loading for the command bridge."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .logging import get_logger

logger = get_logger("devilbot.config")

CONFIG_FILENAME = "devilbot.toml"
ALLOWED_USERS_ENV = "DEVILBOT_ALLOWED_USERS"
DEFAULT_JUMP_RELEASE_SECONDS = 0.5
DEFAULT_COME_RADIUS = 2.0


class ConfigError(ValueError):
    """Raised when the settings file has an unexpected shape."""


@dataclass(frozen=True, slots=True)
class CommandSettings:
    # An empty set lets everyone use commands.
    allowed_users: frozenset[str] = field(default_factory=frozenset)
    jump_release_seconds: float = DEFAULT_JUMP_RELEASE_SECONDS
    come_radius: float = DEFAULT_COME_RADIUS


def _expand_path(s: str | Path) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(str(s))))


def _env(name: str) -> str:
    return (os.environ.get(name) or "").strip()


def _parse_user_list(value: Any, *, key: str) -> frozenset[str]:
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, list):
        items = value
    else:
        raise ConfigError(f"{key} must be a list of usernames")
    users: set[str] = set()
    for item in items:
        if not isinstance(item, str):
            raise ConfigError(f"{key} must only contain strings")
        item = item.strip()
        if item:
            users.add(item)
    return frozenset(users)


def _parse_positive_number(value: Any, *, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{key} must be a number")
    if value <= 0:
        raise ConfigError(f"{key} must be greater than zero")
    return float(value)


def _load_toml(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc


def settings_from_mapping(data: dict[str, Any]) -> CommandSettings:
    """Build settings from a parsed config document (``[commands]`` table)."""
    section = data.get("commands", {})
    if not isinstance(section, dict):
        raise ConfigError("commands must be a table")

    allowed_users: frozenset[str] = frozenset()
    if "allowed_users" in section:
        allowed_users = _parse_user_list(
            section["allowed_users"], key="commands.allowed_users"
        )
    jump_release = DEFAULT_JUMP_RELEASE_SECONDS
    if "jump_release_seconds" in section:
        jump_release = _parse_positive_number(
            section["jump_release_seconds"], key="commands.jump_release_seconds"
        )
    come_radius = DEFAULT_COME_RADIUS
    if "come_radius" in section:
        come_radius = _parse_positive_number(
            section["come_radius"], key="commands.come_radius"
        )

    env_users = _env(ALLOWED_USERS_ENV)
    if env_users:
        allowed_users = _parse_user_list(env_users, key=ALLOWED_USERS_ENV)

    return CommandSettings(
        allowed_users=allowed_users,
        jump_release_seconds=jump_release,
        come_radius=come_radius,
    )


def load_settings(path: str | Path | None = None) -> CommandSettings:
    """Load settings from a TOML file, falling back to defaults.

    A missing file is not an error. ``DEVILBOT_ALLOWED_USERS`` (comma
    separated) replaces the configured allow list when set.
    """
    cfg_path = _expand_path(path) if path is not None else Path(CONFIG_FILENAME)
    data: dict[str, Any] = {}
    if cfg_path.is_file():
        data = _load_toml(cfg_path)
    else:
        logger.debug("devilbot.config.missing", path=str(cfg_path))
    settings = settings_from_mapping(data)
    logger.info(
        "devilbot.config.loaded",
        path=str(cfg_path),
        allowed_users=sorted(settings.allowed_users),
        restricted=bool(settings.allowed_users),
    )
    return settings
