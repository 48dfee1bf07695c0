"""Domain-level error types for use-case and adapter mapping.

Out-of-range slot indices and lookup misses are not errors in this model:
reads return ``None`` and writes are ignored. The types below cover the
remaining precondition failures.
"""
from __future__ import annotations


class SlotModelError(Exception):
    """Base class for slot model failures."""


class InvalidTimeSlotsState(SlotModelError, ValueError):
    """Raised when a TimeSlotsState would be built without usable time data."""


class StrategyFormatError(SlotModelError, ValueError):
    """Raised when a persisted strategy payload cannot be decoded."""


__all__ = ["InvalidTimeSlotsState", "SlotModelError", "StrategyFormatError"]
