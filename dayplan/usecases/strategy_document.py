from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class StrategyDocument:
    """File binding of the strategy currently being edited.

    Shared between the save and load use cases so "Save" knows where the open
    strategy came from.
    """

    path: Optional[str] = None
    is_saved: bool = True

    def mark_dirty(self) -> None:
        self.is_saved = False

    def reset(self) -> None:
        """Forget the file binding, e.g. after "New strategy"."""
        self.path = None
        self.is_saved = True

    @property
    def display_name(self) -> str:
        if not self.path:
            return "Untitled"
        return Path(self.path).stem
