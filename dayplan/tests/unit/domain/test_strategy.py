from __future__ import annotations

import pytest

from dayplan.domain.entities import Activity, ActivityGroup
from dayplan.domain.errors import InvalidTimeSlotsState
from dayplan.domain.strategy import (
    DEFAULT_BEGIN_TIME,
    DEFAULT_NUMBER_OF_SLOTS,
    DEFAULT_SLOT_DURATION,
    Strategy,
)

X = Activity("Read")
Y = Activity("Walk")


def _strategy(slots) -> Strategy:
    strategy = Strategy(len(slots), activities=[X, Y])
    strategy.set_slots(slots)
    return strategy


def test_out_of_range_read_is_unassigned() -> None:
    strategy = _strategy([X, Y])

    assert strategy.slot_at(-1) is None
    assert strategy.slot_at(2) is None


def test_out_of_range_write_is_noop() -> None:
    strategy = _strategy([X, Y])

    strategy.set_slot_at(strategy.number_of_slots, Y)
    strategy.set_slot_at(-1, Y)

    assert strategy.slots == [X, Y]


def test_set_slot_rejects_non_activity() -> None:
    strategy = _strategy([None])

    with pytest.raises(TypeError):
        strategy.set_slot_at(0, "Read")  # type: ignore[arg-type]


def test_set_slots_at_applies_each_index() -> None:
    strategy = _strategy([None] * 5)

    strategy.set_slots_at([4, 0, 2, 99], X)

    assert strategy.slots == [X, None, X, None, X]


def test_copy_slot_copies_value() -> None:
    strategy = _strategy([X, None, Y])

    strategy.copy_slot(0, 2)
    strategy.copy_slot(0, 7)

    assert strategy.slots == [X, None, X]


def test_fill_slots_forward_uses_source() -> None:
    strategy = _strategy([X, None, None, None])

    strategy.fill_slots(0, 3)

    assert strategy.slots == [X, X, X, X]


def test_fill_slots_backward_uses_literal_from_index() -> None:
    strategy = _strategy([None, None, None, Y])

    strategy.fill_slots(3, 0)

    assert strategy.slots == [Y, Y, Y, Y]


def test_fill_slots_source_is_fixed_not_propagated() -> None:
    strategy = _strategy([None, X, Y, Y, None])

    strategy.fill_slots(4, 1)

    assert strategy.slots == [None, None, None, None, None]


def test_fill_slots_out_of_range_is_noop() -> None:
    strategy = _strategy([X, None])

    strategy.fill_slots(0, 5)

    assert strategy.slots == [X, None]


def test_remove_activity_clears_catalogue_and_slots() -> None:
    strategy = _strategy([X, Y, X, None])
    strategy.append_activity(X)

    strategy.remove_activity(X)

    assert strategy.has_activity(X) is False
    assert X not in strategy.slots
    assert strategy.slots == [None, Y, None, None]
    assert strategy.activities == [Y]


def test_append_activity_does_not_touch_slots() -> None:
    strategy = _strategy([None, None])
    walk = Activity("Cook")

    strategy.append_activity(walk)

    assert strategy.has_activity(walk)
    assert strategy.slots == [None, None]


def test_edit_activity_substitutes_catalogue_and_slots() -> None:
    strategy = _strategy([X, Y, X])
    renamed = Activity("Study")

    strategy.edit_activity(X, renamed)

    assert strategy.activities == [renamed, Y]
    assert strategy.slots == [renamed, Y, renamed]


def test_groups_follow_mutations() -> None:
    strategy = _strategy([X, X, None])
    assert strategy.groups() == [ActivityGroup(X, 2), ActivityGroup(None, 1)]

    strategy.set_slot_at(2, X)

    assert strategy.groups() == [ActivityGroup(X, 3)]
    assert strategy.group_index_for_slot_index(2) == 0
    assert strategy.start_slot_index_for_group_index(1) is None


def test_set_slots_requires_same_length() -> None:
    strategy = Strategy(3)

    with pytest.raises(ValueError):
        strategy.set_slots([None, None])


def test_create_empty_layout() -> None:
    strategy = Strategy.create_empty()
    quarter = DEFAULT_NUMBER_OF_SLOTS // 4

    assert strategy.begin_time == DEFAULT_BEGIN_TIME
    assert strategy.slot_duration == DEFAULT_SLOT_DURATION
    assert [a.name for a in strategy.activities] == ["Training", "Work 1", "Nap", "Commute"]
    groups = strategy.groups()
    assert groups[0] == ActivityGroup(strategy.activities[0], quarter)
    assert groups[1] == ActivityGroup(strategy.activities[1], quarter)
    assert groups[2] == ActivityGroup(strategy.activities[2], quarter)
    assert len(groups) == 3 + quarter


def test_time_slots_round_trip() -> None:
    strategy = _strategy([X, None, Y])

    state = strategy.time_slots()
    state.set_activity_at_indices(Y, [1])
    strategy.apply_time_slots(state)

    assert state.begin_time == strategy.begin_time
    assert strategy.slots == [X, Y, Y]


def test_zero_slot_strategy_has_no_time_view() -> None:
    strategy = Strategy(0)

    assert strategy.groups() == []
    with pytest.raises(InvalidTimeSlotsState):
        strategy.time_slots()


def test_debug_dumps_name_slots_and_groups() -> None:
    strategy = _strategy([X, None])

    assert "Slot 0\tRead" in strategy.debug_slots()
    assert "Slot 1\tNone" in strategy.debug_slots()
    assert "Group 1\tNone\t1" in strategy.debug_groups()


def test_constructor_validates_time_settings() -> None:
    with pytest.raises(ValueError):
        Strategy(4, slot_duration=0)
    with pytest.raises(ValueError):
        Strategy(-1)
