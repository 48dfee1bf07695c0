"""Recent-file bookkeeping stored inside the user settings payload."""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Sequence

from ..domain.ports import StoragePort, UseCaseError

DEFAULT_RECENT_LIMIT = 5


def push_recent(paths: Sequence[str], path: str, limit: int) -> List[str]:
    """Move ``path`` to the front of ``paths``, dropping duplicates and overflow."""
    updated = [path] + [existing for existing in paths if existing != path]
    return updated[: max(limit, 0)]


def remember_opened(storage: StoragePort, path: Path) -> None:
    """Record ``path`` as last opened and most recent strategy file."""
    settings = storage.load_user_settings()
    absolute = str(Path(path).resolve())
    limit = _recent_limit(settings.get("recent_limit"))
    recent = settings.get("recent_paths") or []
    settings["recent_paths"] = push_recent([str(p) for p in recent], absolute, limit)
    settings["last_opened_strategy"] = absolute
    settings["last_opened_dir"] = str(Path(absolute).parent)
    storage.save_user_settings(settings)


def recent_strategy_names(storage: StoragePort) -> List[str]:
    """Return file stems of the recent strategies, most recent first."""
    recent = storage.load_user_settings().get("recent_paths") or []
    return [Path(str(p)).stem for p in recent]


@dataclass
class ClearRecentStrategies:
    storage: StoragePort

    def __call__(self) -> None:
        try:
            settings = self.storage.load_user_settings()
            settings["recent_paths"] = []
            self.storage.save_user_settings(settings)
        except Exception as e:
            raise UseCaseError("CLEAR_RECENT_FAILED", str(e)) from e


def _recent_limit(raw: Any) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool) and raw >= 0:
        return raw
    return DEFAULT_RECENT_LIMIT
