"""JSON payload codec for strategies and time slot states.

Payload layout (version 1)::

    {
        "version": 1,
        "beginTime": 360,
        "slotDuration": 15,
        "activities": [{"name": "Nap", "color": "#59a14f"}, ...],
        "slots": [0, 0, null, 1, ...]
    }

Slots reference activities by their catalogue index; ``null`` marks an
unassigned slot.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .entities import DEFAULT_ACTIVITY_COLOR, Activity, Slot
from .errors import InvalidTimeSlotsState, StrategyFormatError
from .strategy import DEFAULT_BEGIN_TIME, DEFAULT_SLOT_DURATION, Strategy
from .time_slots import TimeSlotsState

FORMAT_VERSION = 1

log = logging.getLogger(__name__)


def strategy_to_payload(strategy: Strategy) -> Dict[str, Any]:
    """Serialize ``strategy`` into a JSON-compatible dictionary."""
    activities = strategy.activities
    return {
        "version": FORMAT_VERSION,
        "beginTime": strategy.begin_time,
        "slotDuration": strategy.slot_duration,
        "activities": [_activity_to_payload(activity) for activity in activities],
        "slots": _slot_references(strategy.slots, activities),
    }


def strategy_from_payload(payload: Mapping[str, Any]) -> Strategy:
    """Parse a persisted payload into a :class:`Strategy`."""
    if not isinstance(payload, Mapping):
        raise StrategyFormatError("Strategy payload must be a mapping.")
    _check_version(payload)
    activities = _activities_from_payload(payload.get("activities"))
    slots = _slots_from_payload(payload.get("slots"), activities)
    try:
        strategy = Strategy(
            len(slots),
            activities=activities,
            begin_time=_minutes(payload, "beginTime", DEFAULT_BEGIN_TIME),
            slot_duration=_minutes(payload, "slotDuration", DEFAULT_SLOT_DURATION),
        )
    except (TypeError, ValueError) as exc:
        raise StrategyFormatError(str(exc)) from exc
    strategy.set_slots(slots)
    return strategy


def time_slots_to_payload(state: TimeSlotsState) -> Dict[str, Any]:
    """Serialize ``state``; its catalogue lists activities by first appearance."""
    slots = state.activities()
    activities: List[Activity] = []
    for slot in slots:
        if slot is not None and slot not in activities:
            activities.append(slot)
    return {
        "version": FORMAT_VERSION,
        "beginTime": state.begin_time,
        "slotDuration": state.slot_duration,
        "activities": [_activity_to_payload(activity) for activity in activities],
        "slots": _slot_references(slots, activities),
    }


def time_slots_from_payload(payload: Mapping[str, Any]) -> TimeSlotsState:
    """Parse a persisted payload into a :class:`TimeSlotsState`."""
    if not isinstance(payload, Mapping):
        raise StrategyFormatError("Time slots payload must be a mapping.")
    _check_version(payload)
    activities = _activities_from_payload(payload.get("activities"))
    slots = _slots_from_payload(payload.get("slots"), activities)
    if not slots:
        raise StrategyFormatError("Time slots payload must contain at least one slot.")
    try:
        return TimeSlotsState.create(
            _minutes(payload, "beginTime", DEFAULT_BEGIN_TIME),
            _minutes(payload, "slotDuration", DEFAULT_SLOT_DURATION),
            len(slots),
            slots,
        )
    except InvalidTimeSlotsState as exc:
        raise StrategyFormatError(str(exc)) from exc


def dumps_strategy(strategy: Strategy) -> str:
    return json.dumps(strategy_to_payload(strategy), ensure_ascii=False, indent=2)


def loads_strategy(text: str) -> Strategy:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StrategyFormatError(f"Strategy text is not valid JSON: {exc}") from exc
    return strategy_from_payload(payload)


# ----------------------------------------------------------------------
# Internal helpers
# ----------------------------------------------------------------------
def _activity_to_payload(activity: Activity) -> Dict[str, str]:
    return {"name": activity.name, "color": activity.color}


def _slot_references(slots: Sequence[Slot], activities: Sequence[Activity]) -> List[Optional[int]]:
    references: List[Optional[int]] = []
    for index, slot in enumerate(slots):
        if slot is None:
            references.append(None)
        elif slot in activities:
            references.append(activities.index(slot))
        else:
            log.warning("Slot %s references activity %r missing from catalogue", index, slot.name)
            references.append(None)
    return references


def _check_version(payload: Mapping[str, Any]) -> None:
    version = payload.get("version", FORMAT_VERSION)
    if version != FORMAT_VERSION:
        raise StrategyFormatError(f"Unsupported strategy format version: {version!r}")


def _activities_from_payload(raw: Any) -> List[Activity]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise StrategyFormatError("'activities' must be a list.")
    activities: List[Activity] = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            raise StrategyFormatError("Each activity must be a mapping.")
        try:
            activities.append(
                Activity(
                    name=entry.get("name"),
                    color=entry.get("color") or DEFAULT_ACTIVITY_COLOR,
                )
            )
        except ValueError as exc:
            raise StrategyFormatError(str(exc)) from exc
    return activities


def _slots_from_payload(raw: Any, activities: Sequence[Activity]) -> List[Slot]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise StrategyFormatError("'slots' must be a list.")
    slots: List[Slot] = []
    for index, reference in enumerate(raw):
        if reference is None:
            slots.append(None)
            continue
        if isinstance(reference, bool) or not isinstance(reference, int):
            raise StrategyFormatError(f"Slot {index} must reference an activity index or null.")
        if not 0 <= reference < len(activities):
            raise StrategyFormatError(
                f"Slot {index} references unknown activity index {reference}."
            )
        slots.append(activities[reference])
    return slots


def _minutes(payload: Mapping[str, Any], key: str, default: int) -> int:
    value = payload.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise StrategyFormatError(f"'{key}' must be an integer number of minutes.")
    return value


__all__ = [
    "FORMAT_VERSION",
    "dumps_strategy",
    "loads_strategy",
    "strategy_from_payload",
    "strategy_to_payload",
    "time_slots_from_payload",
    "time_slots_to_payload",
]
