"""Environment variable utilities."""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)


def get_env_str(name: str) -> Optional[str]:
    """Get a stripped string environment variable.

    Args:
        name: Environment variable name

    Returns:
        The stripped value, or None when unset or blank
    """
    raw = os.getenv(name)
    if raw is None:
        return None

    s = raw.strip()
    return s or None


def get_env_bool(name: str, default: bool) -> bool:
    """Get boolean environment variable.

    Args:
        name: Environment variable name
        default: Default value if not found

    Returns:
        Boolean value from environment or default
    """
    raw = os.getenv(name)
    if raw is None:
        return default

    s = raw.strip()
    if s == "":
        return default

    lowered = s.lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False

    try:
        return bool(int(s))
    except ValueError:
        logger.warning(f"Invalid boolean value for {name}: '{raw}'. Using default: {default}")
        return default
