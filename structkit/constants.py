import logging
import os
from typing import Optional

# ----------------------------
# Defaults & Env Overrides
# ----------------------------

ENV_PREFIX = "STRUCTKIT_"
LOG_ENV_PREFIX = f"{ENV_PREFIX}LOG_"

LOG_DEFAULT_NAME = "structkit"
LOG_DEFAULT_LEVEL = logging.WARNING
LOG_DEFAULT_JSON = False
LOG_DEFAULT_STDERR = False

# Accept common textual levels
LOG_LEVEL_MAP = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}

DEFAULT_PATH_DELIMITER = "."

# Payment card numbers carry 13 to 19 digits (ISO/IEC 7812).
CARD_MIN_DIGITS = 13
CARD_MAX_DIGITS = 19

_TRUTHY = {"1", "true", "yes", "on"}


def env_log_level() -> int:
    lvl = os.getenv(f"{LOG_ENV_PREFIX}LEVEL", "").upper()
    return LOG_LEVEL_MAP.get(lvl, LOG_DEFAULT_LEVEL)


def env_log_json(default: bool = LOG_DEFAULT_JSON) -> bool:
    v = os.getenv(f"{LOG_ENV_PREFIX}JSON")
    if v is None:
        return default
    return v.strip().lower() in _TRUTHY


def env_log_stderr(default: bool = LOG_DEFAULT_STDERR) -> bool:
    v = os.getenv(f"{LOG_ENV_PREFIX}STDERR")
    if v is None:
        return default
    return v.strip().lower() in _TRUTHY


def env_path_delimiter() -> str:
    return os.getenv(f"{ENV_PREFIX}PATH_DELIMITER") or DEFAULT_PATH_DELIMITER


def env_seed() -> Optional[int]:
    raw = os.getenv(f"{ENV_PREFIX}SEED")
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        return None
