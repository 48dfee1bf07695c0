from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import pytest

from dayplan.adapters.storage_local import StorageLocal
from dayplan.domain.ports import UseCaseError
from dayplan.domain.strategy import Strategy
from dayplan.usecases.load_strategy import LoadLastOpenedStrategy, LoadStrategy
from dayplan.usecases.recent_strategies import (
    ClearRecentStrategies,
    push_recent,
    recent_strategy_names,
)
from dayplan.usecases.save_strategy import SaveStrategy
from dayplan.usecases.strategy_document import StrategyDocument


class _BrokenStorage(StorageLocal):
    def save_strategy(self, path: Any, payload: Dict[str, Any]) -> Path:
        raise OSError("disk full")


def test_push_recent_moves_to_front_and_caps() -> None:
    assert push_recent(["a", "b", "c"], "b", 5) == ["b", "a", "c"]
    assert push_recent(["a", "b", "c"], "d", 3) == ["d", "a", "b"]
    assert push_recent(["a"], "b", 0) == []


def test_save_then_load_restores_equal_strategy(tmp_path: Path) -> None:
    storage = StorageLocal(root_dir=str(tmp_path))
    document = StrategyDocument()
    strategy = Strategy.create_empty()
    strategy.remove_activity(strategy.activities[1])

    saved = SaveStrategy(storage, document)(strategy, "day")
    loaded = LoadStrategy(storage, StrategyDocument())(saved)

    assert loaded == strategy
    assert document.path == str(saved)
    assert document.is_saved
    assert document.display_name == "day"


def test_save_without_path_requires_one(tmp_path: Path) -> None:
    save = SaveStrategy(StorageLocal(root_dir=str(tmp_path)))

    with pytest.raises(UseCaseError) as excinfo:
        save(Strategy())

    assert excinfo.value.code == "NO_STRATEGY_PATH"


def test_save_reuses_document_path(tmp_path: Path) -> None:
    storage = StorageLocal(root_dir=str(tmp_path))
    document = StrategyDocument()
    save = SaveStrategy(storage, document)
    first = save(Strategy(), "reuse")
    document.mark_dirty()

    second = save(Strategy(8))

    assert second == first
    assert document.is_saved
    assert LoadStrategy(storage)(second).number_of_slots == 8


def test_save_failure_maps_to_use_case_error(tmp_path: Path) -> None:
    document = StrategyDocument()
    document.mark_dirty()
    save = SaveStrategy(_BrokenStorage(root_dir=str(tmp_path)), document)

    with pytest.raises(UseCaseError) as excinfo:
        save(Strategy(), "broken")

    assert excinfo.value.code == "SAVE_STRATEGY_FAILED"
    assert "disk full" in excinfo.value.message
    assert document.is_saved is False


def test_load_missing_file_maps_to_use_case_error(tmp_path: Path) -> None:
    with pytest.raises(UseCaseError) as excinfo:
        LoadStrategy(StorageLocal(root_dir=str(tmp_path)))("missing")

    assert excinfo.value.code == "LOAD_STRATEGY_FAILED"


def test_recent_bookkeeping(tmp_path: Path) -> None:
    storage = StorageLocal(root_dir=str(tmp_path))
    save = SaveStrategy(storage)
    for name in ("mon", "tue", "mon"):
        save(Strategy(), name)

    settings = storage.load_user_settings()
    assert recent_strategy_names(storage) == ["mon", "tue"]
    assert settings["last_opened_strategy"] == str((tmp_path / "mon.json").resolve())
    assert settings["last_opened_dir"] == str(tmp_path.resolve())

    ClearRecentStrategies(storage)()

    assert recent_strategy_names(storage) == []


def test_load_last_opened(tmp_path: Path) -> None:
    storage = StorageLocal(root_dir=str(tmp_path))
    assert LoadLastOpenedStrategy(storage)() is None

    strategy = Strategy.create_empty()
    SaveStrategy(storage)(strategy, "last")
    document = StrategyDocument()

    assert LoadLastOpenedStrategy(storage, document)() == strategy
    assert document.display_name == "last"
