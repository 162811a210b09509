import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_PROMPT = "> "
DEFAULT_RECURSION_LIMIT = 10000

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_log_level(override=None):
    raw = override or os.environ.get("PYLOX_LOG_LEVEL") or DEFAULT_LOG_LEVEL
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        return DEFAULT_LOG_LEVEL
    return level


def get_prompt():
    return os.environ.get("PYLOX_PROMPT", DEFAULT_PROMPT)


def get_recursion_limit():
    raw = os.environ.get("PYLOX_RECURSION_LIMIT")
    if not raw:
        return DEFAULT_RECURSION_LIMIT
    try:
        limit = int(raw)
    except ValueError:
        logger.warning("ignoring PYLOX_RECURSION_LIMIT=%r, not an integer", raw)
        return DEFAULT_RECURSION_LIMIT
    if limit <= 0:
        logger.warning("ignoring non-positive PYLOX_RECURSION_LIMIT=%d", limit)
        return DEFAULT_RECURSION_LIMIT
    return limit
