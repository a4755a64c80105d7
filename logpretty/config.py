"""Configuration loading from CLI args, env vars, and optional YAML file."""

import logging
import os
from dataclasses import dataclass

import yaml

from logpretty.fields import BLACKLISTED_FIELDS, FIRST_FIELDS, LAST_FIELDS, FieldPolicy

logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = "WARNING"


class ConfigError(Exception):
    """Raised when the configuration is invalid."""


@dataclass(frozen=True)
class Config:
    first: tuple[str, ...] = FIRST_FIELDS
    last: tuple[str, ...] = LAST_FIELDS
    blacklist: tuple[str, ...] = BLACKLISTED_FIELDS
    whitelist: tuple[str, ...] | None = None
    color: bool = True

    @property
    def policy(self) -> FieldPolicy:
        return FieldPolicy(
            first=self.first,
            last=self.last,
            blacklist=self.blacklist,
            whitelist=self.whitelist,
        )


def split_keys(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated flag value, dropping empty entries."""
    if not value:
        return ()
    return tuple(k.strip() for k in value.split(",") if k.strip())


def _key_list(yaml_data: dict, name: str) -> tuple[str, ...] | None:
    """Read a list of field names from YAML. None when the key is absent."""
    raw = yaml_data.get(name)
    if raw is None:
        return None
    if not isinstance(raw, list) or not all(isinstance(k, str) for k in raw):
        raise ConfigError(f"'{name}' must be a list of field names")
    return tuple(dict.fromkeys(raw))


def load_yaml_config(path: str | None) -> dict:
    """Load field rules from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    logger.info("Loaded YAML config from %s", path)
    return data


def load_config(cli_args, yaml_data: dict) -> Config:
    """Build Config from CLI args, env vars, and parsed YAML data.

    CLI flags override YAML, YAML overrides the built-in field sets.
    Extra blacklist keys are added to the built-in blacklist, never
    replace it.
    """
    cli_blacklist = split_keys(getattr(cli_args, "blacklist", None))
    cli_whitelist = split_keys(getattr(cli_args, "whitelist", None))
    if cli_blacklist and cli_whitelist:
        raise ConfigError(
            "Use only -b or -w, not both "
            f"[{','.join(cli_blacklist)}, {','.join(cli_whitelist)}]"
        )

    extra_blacklist = cli_blacklist or _key_list(yaml_data, "blacklist") or ()
    whitelist = cli_whitelist or _key_list(yaml_data, "whitelist") or None
    if extra_blacklist and whitelist:
        raise ConfigError(
            "Use only a blacklist or a whitelist, not both "
            f"[{','.join(extra_blacklist)}, {','.join(whitelist)}]"
        )

    first = _key_list(yaml_data, "first")
    last = _key_list(yaml_data, "last")

    color = yaml_data.get("color", True)
    if not isinstance(color, bool):
        raise ConfigError("'color' must be true or false")
    if getattr(cli_args, "no_color", False) or os.environ.get("NO_COLOR"):
        color = False

    return Config(
        first=FIRST_FIELDS if first is None else first,
        last=LAST_FIELDS if last is None else last,
        blacklist=tuple(dict.fromkeys(BLACKLISTED_FIELDS + extra_blacklist)),
        whitelist=whitelist,
        color=color,
    )


def resolve_log_level(value: str | None = None) -> int:
    """Map a level name (default from LOGPRETTY_LOG_LEVEL) to a logging level."""
    name = (value or os.environ.get("LOGPRETTY_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ConfigError(f"Unknown log level: {name}")
    return level
