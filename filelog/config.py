"""Configuration module — frozen dataclass loaded from env vars and optional YAML."""

import logging
import os
from dataclasses import dataclass

import yaml

from filelog.severity import check_encoding

logger = logging.getLogger(__name__)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


def _parse_mode(value) -> int | None:
    """Parse an octal permission string such as "0644" or "0o644".

    Unquoted YAML integers are decimal unless written with a leading zero, so
    an int is only accepted when it fits the plain permission bits. Modes with
    setuid, setgid or sticky bits must be given as strings.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if 0 <= value <= 0o777 else None
    try:
        mode = int(str(value).strip(), 8)
    except ValueError:
        return None
    if not 0 <= mode <= 0o7777:
        return None
    return mode


@dataclass(frozen=True)
class Config:
    log_path: str = "./logs/app.log"
    file_mode: int = 0o755
    encoding: str = "utf-8"
    create_dirs: bool = True


def load_yaml_config(path: str | None) -> dict:
    """Load writer settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded YAML config from %s", path)
        return data
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}


def load_config(yaml_data: dict | None = None) -> Config:
    """Build Config from env vars, then YAML values, then defaults."""
    yaml_data = yaml_data or {}

    raw_mode = os.environ.get("LOG_FILE_MODE", yaml_data.get("file_mode"))
    file_mode = Config.file_mode
    if raw_mode is not None:
        parsed = _parse_mode(raw_mode)
        if parsed is None:
            logger.warning("Invalid file mode %r, falling back to %o", raw_mode, file_mode)
        else:
            file_mode = parsed

    raw_create = os.environ.get("LOG_CREATE_DIRS", yaml_data.get("create_dirs"))
    if raw_create is None:
        create_dirs = Config.create_dirs
    elif isinstance(raw_create, str):
        create_dirs = _parse_bool(raw_create)
    else:
        create_dirs = bool(raw_create)

    encoding = os.environ.get("LOG_ENCODING", yaml_data.get("encoding", Config.encoding))
    try:
        check_encoding(encoding)
    except ValueError as e:
        logger.warning("Invalid encoding: %s, falling back to %s", e, Config.encoding)
        encoding = Config.encoding

    return Config(
        log_path=os.environ.get("LOG_PATH", yaml_data.get("log_path", Config.log_path)),
        file_mode=file_mode,
        encoding=encoding,
        create_dirs=create_dirs,
    )
