"""Root logger setup for planner sessions.

The saved ``debug_logging`` preference chooses between DEBUG and INFO. The
environment wins over it: ``DAYPLAN_LOG_LEVEL`` names a level (``warning`` or
``10``) and a truthy ``DAYPLAN_DEBUG`` asks for DEBUG.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
LEVEL_VAR = "DAYPLAN_LOG_LEVEL"
DEBUG_VAR = "DAYPLAN_DEBUG"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def parse_level(text: Optional[str]) -> Optional[int]:
    """Return the level named by ``text`` (name or number), or None."""
    token = (text or "").strip()
    if not token:
        return None
    if token.isdigit():
        return int(token)
    level = logging.getLevelName(token.upper())
    return level if isinstance(level, int) else None


def env_level(environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """Level forced through the environment, or None when nothing is forced."""
    env = os.environ if environ is None else environ
    explicit = parse_level(env.get(LEVEL_VAR))
    if explicit is not None:
        return explicit
    if env.get(DEBUG_VAR, "").strip().lower() in _TRUTHY:
        return logging.DEBUG
    return None


def preferred_level(debug_enabled: bool) -> int:
    forced = env_level()
    if forced is not None:
        return forced
    return logging.DEBUG if debug_enabled else logging.INFO


def apply_preferences(debug_enabled: bool) -> int:
    """Set the root level from the saved preference; returns the level used."""
    level = preferred_level(debug_enabled)
    logging.getLogger().setLevel(level)
    return level


def configure_root(debug_enabled: bool = False) -> int:
    """Install the session log format once, then apply the preference."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, datefmt="%H:%M:%S")
    return apply_preferences(debug_enabled)


def env_forces_debug() -> bool:
    forced = env_level()
    return forced is not None and forced <= logging.DEBUG
