"""Bootstrap settings read before the database is opened.

Only two keys live here, because both are needed before the DB exists:

    db_folder   directory holding suscriptrack.db (default: working directory)
    log_level   logging level name, e.g. "DEBUG" (default: INFO)

Everything else (currency, date format, reminders on/off) is stored in the
app_settings table. The file is ~/.suscriptrack/config.json.
"""
import json
import logging
import os
from pathlib import Path

CONFIG_DIR = Path.home() / ".suscriptrack"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULT_LOG_LEVEL = "INFO"

logger = logging.getLogger(__name__)


def load_config() -> dict:
    """Returns {} on missing, unreadable or non-object JSON; never raises."""
    try:
        data = json.loads(CONFIG_FILE.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(config: dict) -> bool:
    """Atomic write (temp file, then os.replace). Returns False if it failed."""
    tmp = CONFIG_FILE.with_suffix(".tmp")
    try:
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        tmp.write_text(json.dumps(config, indent=2), encoding="utf-8")
        os.replace(tmp, CONFIG_FILE)
    except OSError as exc:
        logger.warning("Could not save %s: %s", CONFIG_FILE, exc)
        tmp.unlink(missing_ok=True)
        return False
    return True


def _update(key: str, value) -> bool:
    config = load_config()
    if value is None:
        config.pop(key, None)
    else:
        config[key] = value
    return save_config(config)


def get_db_folder() -> str | None:
    return load_config().get("db_folder") or None


def set_db_folder(path: str | None) -> bool:
    """None resets to the default location."""
    return _update("db_folder", path)


def get_log_level() -> int:
    """Numeric level for config["log_level"]; unknown names give INFO."""
    name = str(load_config().get("log_level", DEFAULT_LOG_LEVEL)).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO
