from __future__ import annotations

from typing import List

from dayplan.domain.entities import Activity
from dayplan.domain.strategy import Strategy
from dayplan.viewmodels.slot_board_vm import SlotBoardVM, format_minutes

X = Activity("Read", "#aa0000")


def _vm(slots) -> SlotBoardVM:
    strategy = Strategy(len(slots), activities=[X], begin_time=540, slot_duration=30)
    strategy.set_slots(slots)
    return SlotBoardVM(strategy=strategy)


def test_pull_fills_from_origin_and_notifies() -> None:
    changes: List[Strategy] = []
    vm = _vm([X, None, None, None])
    vm.on_strategy_changed = changes.append

    assert vm.begin_pull(0)
    vm.pull_to(2)
    vm.pull_to(2)
    vm.end_pull()

    assert vm.strategy.slots == [X, X, X, None]
    assert len(changes) == 1
    assert not vm.is_pulling


def test_pull_ignored_without_origin_or_in_range_target() -> None:
    vm = _vm([X, None])

    vm.pull_to(1)
    assert vm.begin_pull(5) is False
    vm.begin_pull(0)
    vm.pull_to(9)

    assert vm.strategy.slots == [X, None]


def test_selection_commands_assign_and_clear() -> None:
    selections: List[List[int]] = []
    vm = _vm([None, None, None])
    vm.on_selection_changed = selections.append

    vm.select_slot(2)
    vm.select_slot(0)
    vm.select_slot(7)
    assert vm.selection_slots() == [0, 2]
    vm.cmd_set_activity_for_selection(X)

    assert vm.strategy.slots == [X, None, X]
    assert not vm.has_selection()
    assert selections[-1] == []

    vm.select_slots([0, 1])
    vm.cmd_clear_selection_activity()
    assert vm.strategy.slots == [None, None, X]


def test_group_selection_uses_index_translation() -> None:
    vm = _vm([X, X, None])

    assert vm.select_group_at_slot(1) == 0
    assert vm.selected_group_index == 0
    assert vm.select_group_at_slot(3) is None
    vm.select_group_at_slot(2)
    vm.deselect_all_groups()
    assert vm.selected_group_index is None


def test_group_rows_and_ruler_labels() -> None:
    vm = _vm([X, X, None])
    vm.select_group_at_slot(2)

    rows = vm.group_rows()

    assert [(r.start_slot, r.length, r.activity_name) for r in rows] == [(0, 2, "Read"), (2, 1, "")]
    assert rows[0].begin_label == "09:00"
    assert rows[0].end_label == "10:00"
    assert rows[0].color == "#aa0000"
    assert rows[1].color is None
    assert rows[1].selected
    assert vm.ruler_labels() == ["09:00", "09:30", "10:00", "10:30"]
    assert vm.is_integer_hour_at(2)
    assert not vm.is_integer_hour_at(1)


def test_set_strategy_resets_state() -> None:
    changes: List[Strategy] = []
    vm = _vm([X, None])
    vm.on_strategy_changed = changes.append
    vm.select_slot(1)
    vm.select_group_at_slot(0)
    replacement = Strategy(4)

    vm.set_strategy(replacement)

    assert vm.strategy is replacement
    assert vm.selection_slots() == []
    assert vm.selected_group_index is None
    assert changes == [replacement]


def test_format_minutes_wraps_past_midnight() -> None:
    assert format_minutes(0) == "00:00"
    assert format_minutes(25 * 60 + 5) == "01:05"
