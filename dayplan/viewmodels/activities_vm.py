from __future__ import annotations

from dataclasses import replace
from typing import Callable, List, Optional

from ..domain.entities import DEFAULT_ACTIVITY_COLOR, Activity
from ..domain.strategy import Strategy


class ActivitiesVM:
    """Catalogue editing for the activities window; every change keeps slots consistent."""

    def __init__(
        self,
        strategy: Strategy,
        *,
        on_activities_changed: Optional[Callable[[List[Activity]], None]] = None,
    ) -> None:
        self.strategy = strategy
        self.on_activities_changed = on_activities_changed

    def activities(self) -> List[Activity]:
        return self.strategy.activities

    def add_activity(self, name: str, color: str = DEFAULT_ACTIVITY_COLOR) -> Activity:
        activity = Activity(name=name, color=color)
        if self.strategy.has_activity(activity):
            raise ValueError(f"Activity '{activity.name}' already exists.")
        self.strategy.append_activity(activity)
        self._emit()
        return activity

    def edit_activity(
        self,
        index: int,
        *,
        name: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Activity:
        """Rename/recolor the activity at ``index``; slots using it follow."""
        old = self.activities()[index]
        new = replace(
            old,
            name=old.name if name is None else name,
            color=old.color if color is None else color,
        )
        if new == old:
            return old
        if self.strategy.has_activity(new):
            raise ValueError(f"Activity '{new.name}' already exists.")
        self.strategy.edit_activity(old, new)
        self._emit()
        return new

    def remove_activity(self, index: int) -> Activity:
        activity = self.activities()[index]
        self.strategy.remove_activity(activity)
        self._emit()
        return activity

    def _emit(self) -> None:
        if self.on_activities_changed:
            self.on_activities_changed(self.activities())
