"""Slot board state: slot/group selection, pull-to-fill gestures, render rows.

Call context:
    A board widget translates pointer positions into slot indices and calls
    the selection and pull methods here; it redraws from ``group_rows()`` and
    ``ruler_labels()`` whenever ``on_strategy_changed`` fires.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Set

from ..domain.entities import Activity, Slot
from ..domain.strategy import Strategy


@dataclass
class GroupRow:
    """Display row for one activity group on the board."""
    group_index: int
    start_slot: int
    length: int
    activity_name: str
    color: Optional[str]
    begin_label: str
    end_label: str
    selected: bool


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as ``HH:MM`` (wrapping past midnight)."""
    hours, mins = divmod(minutes, 60)
    return f"{hours % 24:02d}:{mins:02d}"


@dataclass
class SlotBoardVM:
    """Holds SlotBoard state on top of a Strategy. Pure UI-logic."""

    strategy: Strategy = field(default_factory=Strategy.create_empty)
    on_strategy_changed: Optional[Callable[[Strategy], None]] = None
    on_selection_changed: Optional[Callable[[List[int]], None]] = None

    _selected_slots: Set[int] = field(default_factory=set)
    _selected_group_index: Optional[int] = None
    _pulled_from: Optional[int] = None
    _pulled_to: Optional[int] = None

    def set_strategy(self, strategy: Strategy) -> None:
        self.strategy = strategy
        self._selected_slots = set()
        self._selected_group_index = None
        self.end_pull()
        self._emit_selection()
        self._emit_strategy()

    # ---- Slot selection ----
    def select_slot(self, slot_index: int) -> None:
        if not self.strategy.has_slot_index(slot_index):
            return
        self._selected_slots.add(slot_index)
        self._emit_selection()

    def select_slots(self, slot_indices: Iterable[int]) -> None:
        valid = {i for i in slot_indices if self.strategy.has_slot_index(i)}
        self._selected_slots = valid
        self._emit_selection()

    def deselect_all_slots(self) -> None:
        if not self._selected_slots:
            return
        self._selected_slots = set()
        self._emit_selection()

    def selection_slots(self) -> List[int]:
        return sorted(self._selected_slots)

    def has_selection(self) -> bool:
        return bool(self._selected_slots)

    # ---- Group selection ----
    @property
    def selected_group_index(self) -> Optional[int]:
        return self._selected_group_index

    def select_group_at_slot(self, slot_index: int) -> Optional[int]:
        """Select the group under ``slot_index``; clicking past the end clears it."""
        self._selected_group_index = self.strategy.group_index_for_slot_index(slot_index)
        return self._selected_group_index

    def deselect_all_groups(self) -> None:
        self._selected_group_index = None

    # ---- Pull-to-fill ----
    @property
    def is_pulling(self) -> bool:
        return self._pulled_from is not None

    def begin_pull(self, slot_index: int) -> bool:
        if not self.strategy.has_slot_index(slot_index):
            return False
        self._pulled_from = slot_index
        self._pulled_to = slot_index
        return True

    def pull_to(self, slot_index: int) -> None:
        """Extend the pull to ``slot_index``, filling from the pull origin."""
        if self._pulled_from is None or not self.strategy.has_slot_index(slot_index):
            return
        if slot_index == self._pulled_to:
            return
        self.strategy.fill_slots(self._pulled_from, slot_index)
        self._pulled_to = slot_index
        self._emit_strategy()

    def end_pull(self) -> None:
        self._pulled_from = None
        self._pulled_to = None

    # ---- Commands surfaced to View ----
    def cmd_set_activity_for_selection(self, activity: Slot) -> None:
        if not self._selected_slots:
            return
        self.strategy.set_slots_at(self.selection_slots(), activity)
        self._selected_slots = set()
        self._emit_selection()
        self._emit_strategy()

    def cmd_clear_selection_activity(self) -> None:
        self.cmd_set_activity_for_selection(None)

    # ---- Render helpers ----
    def group_rows(self) -> List[GroupRow]:
        rows: List[GroupRow] = []
        start = 0
        for index, activity_group in enumerate(self.strategy.groups()):
            activity: Optional[Activity] = activity_group.activity
            end = start + activity_group.length
            rows.append(
                GroupRow(
                    group_index=index,
                    start_slot=start,
                    length=activity_group.length,
                    activity_name=activity.name if activity else "",
                    color=activity.color if activity else None,
                    begin_label=format_minutes(self._slot_begin_time(start)),
                    end_label=format_minutes(self._slot_begin_time(end)),
                    selected=index == self._selected_group_index,
                )
            )
            start = end
        return rows

    def ruler_labels(self) -> List[str]:
        """One label per slot boundary, including the end of the last slot."""
        return [
            format_minutes(self._slot_begin_time(index))
            for index in range(self.strategy.number_of_slots + 1)
        ]

    def is_integer_hour_at(self, index: int) -> bool:
        return self._slot_begin_time(index) % 60 == 0

    # ---- Helpers ----
    def _slot_begin_time(self, index: int) -> int:
        return self.strategy.begin_time + index * self.strategy.slot_duration

    def _emit_selection(self) -> None:
        if self.on_selection_changed:
            self.on_selection_changed(self.selection_slots())

    def _emit_strategy(self) -> None:
        if self.on_strategy_changed:
            self.on_strategy_changed(self.strategy)
