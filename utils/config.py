"""
Configuration utilities for the ofremove tool.
"""

import logging
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

ENV_FILENAME = ".ofremove.env"


def load_env_vars() -> None:
    """
    Load environment variables from .env files in the following order:
    1. .ofremove.env in the current directory
    2. .ofremove.env in the user's home directory
    Values already present in the environment are never overridden.
    """
    if os.path.exists(ENV_FILENAME):
        load_dotenv(ENV_FILENAME)

    home_env = Path.home() / ENV_FILENAME
    if home_env.exists():
        load_dotenv(home_env)


def get_config(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get configuration value from environment variables."""
    return os.getenv(key, default)


def get_script_timeout() -> Optional[float]:
    """Seconds to wait for osascript, or None when OF_SCRIPT_TIMEOUT is unset or unusable."""
    raw = get_config("OF_SCRIPT_TIMEOUT")
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        return None
    return timeout if timeout > 0 else None


def get_log_level() -> int:
    name = (get_config("OF_LOG_LEVEL") or "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_osascript_command() -> str:
    return get_config("OF_OSASCRIPT") or "osascript"
