"""Configuration management for mylog."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

MYLOG_HOME = Path(os.environ.get("MYLOG_HOME", Path.home() / ".config" / "mylog"))
CONFIG_FILE = MYLOG_HOME / "mylog.conf"
DEFAULT_LOG_DIR = "~/mylog"

KEYS = ("log_dir", "editor", "pager")


class ConfigError(Exception):
    """Invalid configuration key or value."""


@dataclass
class Config:
    """mylog configuration."""

    log_dir: str = DEFAULT_LOG_DIR
    editor: str = ""
    pager: bool = True


def _parse_bool(key: str, value: str) -> bool:
    match value.lower():
        case "true" | "yes" | "on" | "1":
            return True
        case "false" | "no" | "off" | "0":
            return False
    raise ConfigError(f"{key.upper()} must be true or false, got '{value}'")


def _strip_value(value: str) -> str:
    """Drop surrounding quotes, or an inline comment from an unquoted value."""
    value = value.strip()

    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]

    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _apply(config: Config, key: str, value: str) -> None:
    match key:
        case "log_dir":
            config.log_dir = value or DEFAULT_LOG_DIR
        case "editor":
            config.editor = value
        case "pager":
            config.pager = _parse_bool(key, value)
        case _:
            raise ConfigError(f"Unknown config key '{key}'")


def load_config(path: Path | None = None) -> Config:
    """Load configuration from mylog.conf file."""
    path = path or CONFIG_FILE
    config = Config()

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        try:
            _apply(config, key, _strip_value(value))
        except ConfigError as e:
            logger.warning(f"Ignoring {path.name} line '{line}': {e}")

    return config


def get_value(config: Config, key: str) -> str:
    """Read a config value as text."""
    key = key.lower()
    if key not in KEYS:
        raise ConfigError(f"Unknown config key '{key}'")
    value = getattr(config, key)
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def set_value(key: str, value: str, path: Path | None = None) -> Config:
    """
    Set a key in mylog.conf, keeping other lines and comments intact.

    Returns the configuration as reloaded from the file.
    """
    path = path or CONFIG_FILE
    key = key.lower()
    _apply(Config(), key, value)

    lines = path.read_text().splitlines() if path.exists() else []
    new_line = f'{key.upper()}="{value}"'
    for i, line in enumerate(lines):
        name, sep, _ = line.partition("=")
        if sep and not line.lstrip().startswith("#") and name.strip().lower() == key:
            lines[i] = new_line
            break
    else:
        lines.append(new_line)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n")
    return load_config(path)
