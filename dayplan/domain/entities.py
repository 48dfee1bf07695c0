"""Domain value objects shared across the strategy model, adapters, and view models."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

DEFAULT_ACTIVITY_COLOR = "#6b8fb3"

_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")


@dataclass(frozen=True)
class Activity:
    """Named, user-defined category that can be assigned to time slots."""

    name: str
    """Display name; activities compare equal when name and color match."""
    color: str = DEFAULT_ACTIVITY_COLOR
    """Display color in ``#RRGGBB`` notation."""

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Activity.name must be a non-empty string.")
        object.__setattr__(self, "name", self.name.strip())
        if not isinstance(self.color, str) or not _COLOR_PATTERN.match(self.color.strip()):
            raise ValueError("Activity.color must use #RRGGBB notation.")
        object.__setattr__(self, "color", self.color.strip().lower())

    def __str__(self) -> str:
        return self.name


Slot = Optional[Activity]
"""Assignment state of one slot: ``None`` when unassigned."""

SlotArray = List[Slot]


@dataclass(frozen=True)
class ActivityGroup:
    """Run of contiguous slots sharing one assignment state."""

    activity: Slot
    """Activity shared by every slot in the run, or None for an empty slot."""
    length: int = 1
    """Number of slots covered by the run; always positive."""

    def __post_init__(self) -> None:
        if isinstance(self.length, bool) or not isinstance(self.length, int):
            raise TypeError("ActivityGroup.length must be an integer.")
        if self.length < 1:
            raise ValueError("ActivityGroup.length must be positive.")

    @property
    def is_empty(self) -> bool:
        return self.activity is None


__all__ = [
    "Activity",
    "ActivityGroup",
    "DEFAULT_ACTIVITY_COLOR",
    "Slot",
    "SlotArray",
]
