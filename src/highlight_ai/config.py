"""Persisted endpoint configuration for highlight-ai."""

import json
import logging
import os
import time
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from highlight_ai.errors import ConfigIOError, ConfigParseError
from highlight_ai.models import DEFAULT_BASE_URL, DEFAULT_MODEL_NAME, AppConfig

log = logging.getLogger(__name__)

CONFIG_DIR = Path(os.environ.get("HIGHLIGHT_AI_CONFIG_DIR") or Path.home() / ".highlight-ai")
CONFIG_FILE = CONFIG_DIR / "config.json"

__all__ = [
    "CONFIG_DIR",
    "CONFIG_FILE",
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL_NAME",
    "AppConfig",
    "load_config",
    "needs_setup",
    "save_config",
]


def _resolve(path: Path | None) -> Path:
    return CONFIG_FILE if path is None else Path(path)


def needs_setup(path: Path | None = None) -> bool:
    """Return True when no configuration record has been written yet."""
    return not _resolve(path).exists()


def _read_record(config_file: Path) -> dict[str, Any]:
    try:
        text = config_file.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigParseError(f"{config_file} is not valid UTF-8: {e}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"{config_file} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigParseError(f"{config_file} does not contain a JSON object")
    return data


def _write_record(config_file: Path, record: dict[str, str]) -> None:
    config_dir = config_file.parent
    os.makedirs(config_dir, mode=0o700, exist_ok=True)
    temp_file = config_file.with_name(f".{config_file.name}.{os.getpid()}.{time.time_ns()}.tmp")
    fd = os.open(temp_file, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(record, f, indent=2)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_file, config_file)
    except BaseException:
        temp_file.unlink(missing_ok=True)
        raise


def load_config(path: Path | None = None) -> AppConfig:
    """Load the configuration record, falling back to built-in defaults.

    A missing record is created with defaults. A malformed record is logged
    and ignored (defaults are returned, the file is left untouched). Fields
    missing from an otherwise valid record are filled from the defaults.
    Never raises.
    """
    config_file = _resolve(path)

    if not config_file.exists():
        log.debug("no config at %s, writing defaults", config_file)
        defaults = AppConfig()
        try:
            _write_record(config_file, defaults.to_record())
        except OSError as e:
            log.warning("could not write default config to %s: %s", config_file, e)
        return defaults

    try:
        record = _read_record(config_file)
    except ConfigParseError as e:
        log.warning("ignoring malformed config: %s", e)
        return AppConfig()
    except OSError as e:
        log.warning("could not read config %s: %s", config_file, e)
        return AppConfig()

    try:
        config = AppConfig.model_validate(record)
    except ValidationError as e:
        log.warning("ignoring invalid config %s: %s", config_file, e)
        return AppConfig()
    log.debug("loaded config from %s: %s", config_file, config.to_record())
    return config


def save_config(candidate: Mapping[str, Any] | AppConfig, path: Path | None = None) -> AppConfig:
    """Validate and persist a (possibly partial) configuration.

    Each field takes the candidate's value when present and non-blank,
    otherwise the built-in default. Raises ``ConfigIOError`` when the record
    cannot be written.
    """
    if isinstance(candidate, AppConfig):
        candidate = candidate.to_record()
    validated = AppConfig.model_validate(
        {
            "base_url": candidate.get("baseURL") or candidate.get("base_url"),
            "model_name": candidate.get("modelName") or candidate.get("model_name"),
        }
    )

    config_file = _resolve(path)
    try:
        _write_record(config_file, validated.to_record())
    except OSError as e:
        raise ConfigIOError(f"Could not save configuration to {config_file}: {e}") from e
    log.info("config saved to %s", config_file)
    return validated
