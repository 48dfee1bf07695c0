"""Time-addressed slot state with synchronous change notification.

Times are whole minutes counted from the start of the day. The state keeps one
activity per slot; slot begin times are always derived from
``begin_time + index * slot_duration``, so they cannot drift apart.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Iterator, List, Optional

from .entities import Activity, Slot
from .errors import InvalidTimeSlotsState

Minutes = int

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeSlot:
    """Single slot with its wall-clock position."""

    begin_time: Minutes
    duration: Minutes
    activity: Slot = None

    @property
    def end_time(self) -> Minutes:
        return self.begin_time + self.duration

    def with_activity(self, activity: Slot) -> "TimeSlot":
        return replace(self, activity=activity)


OnChange = Callable[["TimeSlotsState"], None]


class TimeSlotsState:
    """
    Slot activities addressed by index and by time.

    Every mutating call notifies registered callbacks exactly once, before
    returning, even when the call leaves every value as it was.
    """

    def __init__(self, slots: Iterable[TimeSlot]) -> None:
        materialized = list(slots)
        if not materialized:
            raise InvalidTimeSlotsState(
                "TimeSlotsState needs at least one slot to know its begin time and duration."
            )
        first = materialized[0]
        self._begin_time = _check_begin_time(first.begin_time)
        self._slot_duration = _check_duration(first.duration)
        for index, slot in enumerate(materialized):
            expected = self.slot_begin_time(index)
            if slot.begin_time != expected or slot.duration != self._slot_duration:
                raise InvalidTimeSlotsState(
                    f"Slot {index} must begin at {expected} and last {self._slot_duration} minutes, "
                    f"got {slot.begin_time} and {slot.duration}."
                )
        self._activities: List[Slot] = [slot.activity for slot in materialized]
        self._callbacks: List[OnChange] = []

    @classmethod
    def create(
        cls,
        begin_time: Minutes,
        slot_duration: Minutes,
        number_of_slots: int,
        activities: Optional[Iterable[Slot]] = None,
    ) -> "TimeSlotsState":
        """Build a state of ``number_of_slots`` slots, unassigned unless given."""
        count = _check_count(number_of_slots)
        begin = _check_begin_time(begin_time)
        duration = _check_duration(slot_duration)
        values = list(activities) if activities is not None else [None] * count
        if len(values) != count:
            raise InvalidTimeSlotsState(
                f"Expected {count} slot activities, got {len(values)}."
            )
        return cls(
            TimeSlot(begin + index * duration, duration, activity)
            for index, activity in enumerate(values)
        )

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    def add_on_change_callback(self, callback: OnChange) -> None:
        self._callbacks.append(callback)

    def remove_on_change_callback(self, callback: OnChange) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._callbacks):
            callback(self)

    # ------------------------------------------------------------------
    # Time settings
    # ------------------------------------------------------------------
    @property
    def begin_time(self) -> Minutes:
        return self._begin_time

    def set_begin_time(self, begin_time: Minutes) -> None:
        self._begin_time = _check_begin_time(begin_time)
        self._notify()

    @property
    def slot_duration(self) -> Minutes:
        return self._slot_duration

    def set_slot_duration(self, slot_duration: Minutes) -> None:
        self._slot_duration = _check_duration(slot_duration)
        self._notify()

    @property
    def number_of_slots(self) -> int:
        return len(self._activities)

    def set_number_of_slots(self, number_of_slots: int) -> None:
        """Rebuild the slot list, keeping the retained prefix."""
        count = _check_count(number_of_slots)
        current = len(self._activities)
        if count <= current:
            self._activities = self._activities[:count]
        else:
            self._activities = self._activities + [None] * (count - current)
        self._notify()

    @property
    def end_time(self) -> Minutes:
        return self.slot_begin_time(self.number_of_slots)

    def slot_begin_time(self, index: int) -> Minutes:
        return self._begin_time + index * self._slot_duration

    def index_for_time(self, minutes: Minutes) -> Optional[int]:
        """Return the index of the slot running at ``minutes``, or None."""
        if minutes < self._begin_time or minutes >= self.end_time:
            return None
        return (minutes - self._begin_time) // self._slot_duration

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._activities)

    def __iter__(self) -> Iterator[TimeSlot]:
        for index in range(len(self._activities)):
            yield self[index]

    def __getitem__(self, index: int) -> TimeSlot:
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"TimeSlotsState indices must be integers, not {type(index).__name__}.")
        activity = self._activities[index]
        if index < 0:
            index += len(self._activities)
        return TimeSlot(self.slot_begin_time(index), self._slot_duration, activity)

    def has_index(self, index: int) -> bool:
        return 0 <= index < len(self._activities)

    def activity_at(self, index: int) -> Slot:
        if not self.has_index(index):
            return None
        return self._activities[index]

    def activities(self) -> List[Slot]:
        """Return a copy of the per-slot activities in slot order."""
        return list(self._activities)

    def find_slot_with_activity(self, activity: Slot) -> Optional[int]:
        for index, current in enumerate(self._activities):
            if current == activity:
                return index
        return None

    def has_activity(self, activity: Activity) -> bool:
        return self.find_slot_with_activity(activity) is not None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def set_activity_at_indices(self, activity: Slot, indices: Iterable[int]) -> None:
        for index in indices:
            if not self.has_index(index):
                log.debug("Ignoring out-of-range slot index %s", index)
                continue
            self._activities[index] = activity
        self._notify()

    def fill_slots(self, from_index: int, till_index: int) -> None:
        """Copy the slot at ``from_index`` over the whole inclusive range.

        An out-of-range end leaves the slots untouched but still notifies.
        """
        if not self.has_index(from_index) or not self.has_index(till_index):
            log.debug("Ignoring fill over out-of-range slots %s..%s", from_index, till_index)
            self._notify()
            return
        source = self._activities[from_index]
        low, high = sorted((from_index, till_index))
        self.set_activity_at_indices(source, range(low, high + 1))

    def edit_activity(self, old_activity: Activity, new_activity: Slot) -> None:
        indices = [i for i, current in enumerate(self._activities) if current == old_activity]
        self.set_activity_at_indices(new_activity, indices)

    def remove_activity(self, activity: Activity) -> None:
        self.edit_activity(activity, None)

    def assign(self, other: "TimeSlotsState") -> None:
        """Copy time settings and slots from ``other``; notifies once."""
        self._begin_time = other.begin_time
        self._slot_duration = other.slot_duration
        self._activities = other.activities()
        self._notify()

    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeSlotsState):
            return NotImplemented
        return (
            self._begin_time == other._begin_time
            and self._slot_duration == other._slot_duration
            and self._activities == other._activities
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"TimeSlotsState(begin_time={self._begin_time}, "
            f"slot_duration={self._slot_duration}, "
            f"number_of_slots={len(self._activities)})"
        )


def _check_begin_time(value: Minutes) -> Minutes:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTimeSlotsState("begin_time must be an integer number of minutes.")
    if value < 0:
        raise InvalidTimeSlotsState("begin_time cannot be negative.")
    return value


def _check_duration(value: Minutes) -> Minutes:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTimeSlotsState("slot_duration must be an integer number of minutes.")
    if value <= 0:
        raise InvalidTimeSlotsState("slot_duration must be positive.")
    return value


def _check_count(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTimeSlotsState("number_of_slots must be an integer.")
    if value <= 0:
        raise InvalidTimeSlotsState("number_of_slots must be positive.")
    return value


__all__ = ["Minutes", "OnChange", "TimeSlot", "TimeSlotsState"]
