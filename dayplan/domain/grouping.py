"""Run-length grouping of slot arrays and index translation between slots and groups.

Groups are derived state: callers recompute them from the current slot array
instead of patching an existing grouping after a mutation.

Assigned slots merge with an equal left neighbour, but every unassigned slot
becomes its own single-slot group so each gap stays individually selectable.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .entities import Activity, ActivityGroup, Slot


def group(slots: Sequence[Slot]) -> List[ActivityGroup]:
    """Compress ``slots`` into the ordered list of activity groups."""
    groups: List[ActivityGroup] = []
    pending: Optional[Activity] = None
    pending_length = 0
    last_index = len(slots) - 1

    for index, slot in enumerate(slots):
        if slot is None:
            if pending_length:
                groups.append(ActivityGroup(pending, pending_length))
                pending, pending_length = None, 0
            groups.append(ActivityGroup(None, 1))
            continue

        if index == 0 or slots[index - 1] != slot:
            if pending_length:
                groups.append(ActivityGroup(pending, pending_length))
            pending, pending_length = slot, 1
        else:
            pending_length += 1

        if index == last_index:
            groups.append(ActivityGroup(pending, pending_length))

    return groups


def expand(groups: Sequence[ActivityGroup]) -> List[Slot]:
    """Inverse of :func:`group`: repeat each group's activity ``length`` times."""
    slots: List[Slot] = []
    for activity_group in groups:
        slots.extend([activity_group.activity] * activity_group.length)
    return slots


def start_slot_index_for_group_index(
    groups: Sequence[ActivityGroup], group_index: int
) -> Optional[int]:
    """Return the flat index of the first slot in ``groups[group_index]``."""
    if group_index < 0 or group_index >= len(groups):
        return None
    return sum(activity_group.length for activity_group in groups[:group_index])


def group_index_for_slot_index(
    groups: Sequence[ActivityGroup], slot_index: int
) -> Optional[int]:
    """Return the index of the group covering ``slot_index``, or None."""
    start = 0
    for index, activity_group in enumerate(groups):
        end = start + activity_group.length - 1
        if start <= slot_index <= end:
            return index
        start = end + 1
    return None


__all__ = [
    "expand",
    "group",
    "group_index_for_slot_index",
    "start_slot_index_for_group_index",
]
