"""Domain package exports for the slot model."""

from .entities import Activity, ActivityGroup, Slot, SlotArray
from .errors import InvalidTimeSlotsState, SlotModelError, StrategyFormatError
from .grouping import group, group_index_for_slot_index, start_slot_index_for_group_index
from .strategy import Strategy
from .time_slots import TimeSlot, TimeSlotsState

__all__ = [
    "Activity",
    "ActivityGroup",
    "InvalidTimeSlotsState",
    "Slot",
    "SlotArray",
    "SlotModelError",
    "Strategy",
    "StrategyFormatError",
    "TimeSlot",
    "TimeSlotsState",
    "group",
    "group_index_for_slot_index",
    "start_slot_index_for_group_index",
]
