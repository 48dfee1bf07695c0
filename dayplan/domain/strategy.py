"""Strategy aggregate: the activity catalogue plus the per-slot assignment array."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from . import grouping
from .entities import Activity, ActivityGroup, Slot
from .time_slots import Minutes, TimeSlotsState

DEFAULT_BEGIN_TIME: Minutes = 6 * 60
DEFAULT_SLOT_DURATION: Minutes = 15
DEFAULT_NUMBER_OF_SLOTS = 16 * 60 // DEFAULT_SLOT_DURATION

log = logging.getLogger(__name__)


class Strategy:
    """
    Owns the activity catalogue and a fixed-length slot array.

    The slot array length is fixed at construction; out-of-range reads return
    None and out-of-range writes are ignored. Activity groups are derived from
    the slot array on demand and cached against a version counter that every
    slot mutation bumps.
    """

    def __init__(
        self,
        number_of_slots: int = DEFAULT_NUMBER_OF_SLOTS,
        *,
        activities: Optional[Iterable[Activity]] = None,
        begin_time: Minutes = DEFAULT_BEGIN_TIME,
        slot_duration: Minutes = DEFAULT_SLOT_DURATION,
    ) -> None:
        if isinstance(number_of_slots, bool) or not isinstance(number_of_slots, int):
            raise TypeError("Strategy.number_of_slots must be an integer.")
        if number_of_slots < 0:
            raise ValueError("Strategy.number_of_slots cannot be negative.")
        if isinstance(slot_duration, bool) or not isinstance(slot_duration, int) or slot_duration <= 0:
            raise ValueError("Strategy.slot_duration must be a positive number of minutes.")
        if isinstance(begin_time, bool) or not isinstance(begin_time, int) or begin_time < 0:
            raise ValueError("Strategy.begin_time must be a non-negative number of minutes.")

        self.begin_time = begin_time
        self.slot_duration = slot_duration
        self._activities: List[Activity] = list(activities or [])
        self._slots: List[Slot] = [None] * number_of_slots
        self._version = 0
        self._groups_cache: Optional[List[ActivityGroup]] = None
        self._groups_version = -1

    @classmethod
    def create_empty(cls) -> "Strategy":
        """Return the starter strategy shown for a new document."""
        activities = [
            Activity("Training", "#e15759"),
            Activity("Work 1", "#4e79a7"),
            Activity("Nap", "#59a14f"),
            Activity("Commute", "#f28e2b"),
        ]
        strategy = cls(activities=activities)
        count = strategy.number_of_slots
        slots: List[Slot] = []
        for index in range(count):
            if index < count // 4:
                slots.append(activities[0])
            elif index < 2 * count // 4:
                slots.append(activities[1])
            elif index < 3 * count // 4:
                slots.append(activities[2])
            else:
                slots.append(None)
        strategy.set_slots(slots)
        return strategy

    # ------------------------------------------------------------------
    # Catalogue
    # ------------------------------------------------------------------
    @property
    def activities(self) -> List[Activity]:
        return list(self._activities)

    def append_activity(self, activity: Activity) -> None:
        self._activities.append(activity)

    def remove_activity(self, activity: Activity) -> None:
        """Drop ``activity`` from the catalogue and clear every slot using it."""
        self._activities = [current for current in self._activities if current != activity]
        self._slots = [None if slot == activity else slot for slot in self._slots]
        self._touch()

    def edit_activity(self, old_activity: Activity, new_activity: Activity) -> None:
        """Substitute ``new_activity`` for ``old_activity`` in catalogue and slots."""
        self._activities = [
            new_activity if current == old_activity else current
            for current in self._activities
        ]
        self._slots = [new_activity if slot == old_activity else slot for slot in self._slots]
        self._touch()

    def has_activity(self, activity: Activity) -> bool:
        return activity in self._activities

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------
    @property
    def number_of_slots(self) -> int:
        return len(self._slots)

    @property
    def slots(self) -> List[Slot]:
        return list(self._slots)

    def set_slots(self, slots: Sequence[Slot]) -> None:
        """Replace the whole slot array; the length must stay the same."""
        values = list(slots)
        if len(values) != len(self._slots):
            raise ValueError(
                f"Strategy expects {len(self._slots)} slots, got {len(values)}."
            )
        for value in values:
            _check_slot(value)
        self._slots = values
        self._touch()

    def has_slot_index(self, index: int) -> bool:
        return 0 <= index < len(self._slots)

    def slot_at(self, index: int) -> Slot:
        if not self.has_slot_index(index):
            return None
        return self._slots[index]

    def set_slot_at(self, index: int, slot: Slot) -> None:
        _check_slot(slot)
        if not self.has_slot_index(index):
            log.debug("Ignoring write to out-of-range slot index %s", index)
            return
        self._slots[index] = slot
        self._touch()

    def set_slots_at(self, indices: Iterable[int], slot: Slot) -> None:
        for index in indices:
            self.set_slot_at(index, slot)

    def copy_slot(self, from_index: int, to_index: int) -> None:
        if not self.has_slot_index(from_index) or not self.has_slot_index(to_index):
            return
        self.set_slot_at(to_index, self._slots[from_index])

    def fill_slots(self, from_index: int, to_index: int) -> None:
        """Copy the slot at ``from_index`` into every index between the two, inclusive."""
        if not self.has_slot_index(from_index) or not self.has_slot_index(to_index):
            return
        source_index = from_index
        if to_index < from_index:
            from_index, to_index = to_index, from_index
        for index in range(from_index, to_index + 1):
            self.copy_slot(source_index, index)

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------
    def groups(self) -> List[ActivityGroup]:
        if self._groups_cache is None or self._groups_version != self._version:
            self._groups_cache = grouping.group(self._slots)
            self._groups_version = self._version
        return list(self._groups_cache)

    def start_slot_index_for_group_index(self, group_index: int) -> Optional[int]:
        return grouping.start_slot_index_for_group_index(self.groups(), group_index)

    def group_index_for_slot_index(self, slot_index: int) -> Optional[int]:
        return grouping.group_index_for_slot_index(self.groups(), slot_index)

    # ------------------------------------------------------------------
    # Time view
    # ------------------------------------------------------------------
    def time_slots(self) -> TimeSlotsState:
        """Return a time-addressed copy of the slot array.

        A time view needs at least one slot; a zero-slot strategy raises
        ``InvalidTimeSlotsState``.
        """
        return TimeSlotsState.create(
            self.begin_time, self.slot_duration, self.number_of_slots, self._slots
        )

    def apply_time_slots(self, state: TimeSlotsState) -> None:
        """Rebuild the slot array and time settings from ``state``."""
        values = state.activities()
        for value in values:
            _check_slot(value)
        self.begin_time = state.begin_time
        self.slot_duration = state.slot_duration
        self._slots = values
        self._touch()

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    def debug_slots(self) -> str:
        lines = ["-Slots------------------"]
        for index, slot in enumerate(self._slots):
            lines.append(f"Slot {index}\t{slot.name if slot else 'None'}")
        return "\n".join(lines)

    def debug_groups(self) -> str:
        lines = ["-Groups-----------------"]
        for index, activity_group in enumerate(self.groups()):
            name = activity_group.activity.name if activity_group.activity else "None"
            lines.append(f"Group {index}\t{name}\t{activity_group.length}")
        return "\n".join(lines)

    def _touch(self) -> None:
        self._version += 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Strategy):
            return NotImplemented
        return (
            self.begin_time == other.begin_time
            and self.slot_duration == other.slot_duration
            and self._activities == other._activities
            and self._slots == other._slots
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Strategy(activities={len(self._activities)}, "
            f"number_of_slots={len(self._slots)}, "
            f"begin_time={self.begin_time}, slot_duration={self.slot_duration})"
        )


def _check_slot(slot: Slot) -> None:
    if slot is not None and not isinstance(slot, Activity):
        raise TypeError("Slots hold an Activity or None.")


__all__ = [
    "DEFAULT_BEGIN_TIME",
    "DEFAULT_NUMBER_OF_SLOTS",
    "DEFAULT_SLOT_DURATION",
    "Strategy",
]
