"""Toolkit-free session wiring for the planner window.

A window layer creates one ``PlannerSession`` at startup and routes its menu
commands (new, open, save, save as, recent files, debug logging) through it.
Use-case failures surface as ``UseCaseError`` for the window to show.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..adapters.storage_local import StorageLocal
from ..domain.ports import StoragePort, StrategyPath, UseCaseError
from ..domain.strategy import Strategy
from ..usecases.load_strategy import LoadLastOpenedStrategy, LoadStrategy
from ..usecases.recent_strategies import ClearRecentStrategies, recent_strategy_names
from ..usecases.save_strategy import SaveStrategy
from ..usecases.strategy_document import StrategyDocument
from ..utils import logging as logging_utils
from ..viewmodels.activities_vm import ActivitiesVM
from ..viewmodels.settings_vm import SettingsVM
from ..viewmodels.slot_board_vm import SlotBoardVM

STORAGE_ROOT_VAR = "DAYPLAN_STORAGE_ROOT"

# Keys written by the recent-file use cases rather than by the settings dialog.
_RECENT_KEYS = ("last_opened_dir", "last_opened_strategy", "recent_paths")

log = logging.getLogger(__name__)


@dataclass
class PlannerSession:
    storage: StoragePort
    settings_vm: SettingsVM
    document: StrategyDocument
    board_vm: SlotBoardVM
    activities_vm: ActivitiesVM
    on_document_changed: Optional[Callable[[StrategyDocument], None]] = None
    _warnings: List[str] = field(default_factory=list)

    @classmethod
    def start(cls, root_dir: Optional[str] = None) -> "PlannerSession":
        """Load settings, configure logging and reopen the last strategy."""
        storage = StorageLocal(root_dir=root_dir or os.environ.get(STORAGE_ROOT_VAR) or ".")
        settings_vm = SettingsVM()
        warnings: List[str] = []
        try:
            settings_vm.apply_dict(storage.load_user_settings())
        except (OSError, ValueError) as exc:
            warnings.append(f"Could not load settings: {exc}")
        level = logging_utils.configure_root(settings_vm.debug_logging)

        document = StrategyDocument()
        strategy: Optional[Strategy] = None
        try:
            strategy = LoadLastOpenedStrategy(storage, document)()
        except UseCaseError as err:
            warnings.append(f"Could not reopen the last strategy: {err.message}")
            document.reset()
        if strategy is None:
            strategy = Strategy.create_empty()

        session = cls(
            storage=storage,
            settings_vm=settings_vm,
            document=document,
            board_vm=SlotBoardVM(strategy=strategy),
            activities_vm=ActivitiesVM(strategy),
            _warnings=warnings,
        )
        session.board_vm.on_strategy_changed = session._on_strategy_edited
        session.activities_vm.on_activities_changed = session._on_strategy_edited
        settings_vm.on_save = storage.save_user_settings
        for message in warnings:
            log.warning(message)
        log.info(
            "Session started in %s at log level %s",
            getattr(storage, "root", "."),
            logging.getLevelName(level),
        )
        return session

    @property
    def strategy(self) -> Strategy:
        return self.board_vm.strategy

    @property
    def startup_warnings(self) -> List[str]:
        return list(self._warnings)

    # ---- Strategy files ----
    def new_strategy(self) -> Strategy:
        """Replace the open strategy with an empty one built from settings."""
        strategy = self.settings_vm.build_strategy()
        self.document.reset()
        self._show(strategy)
        return strategy

    def open_strategy(self, path: StrategyPath) -> Strategy:
        strategy = LoadStrategy(self.storage, self.document)(path)
        self._show(strategy)
        self._refresh_recent()
        return strategy

    def save_strategy(self, path: Optional[StrategyPath] = None) -> Path:
        """Save to ``path`` (save as) or to the file the strategy came from."""
        saved = SaveStrategy(self.storage, self.document)(self.strategy, path)
        self._refresh_recent()
        self._emit_document()
        return saved

    def recent_strategy_names(self) -> List[str]:
        return recent_strategy_names(self.storage)

    def clear_recent_strategies(self) -> None:
        ClearRecentStrategies(self.storage)()
        self._refresh_recent()

    # ---- Settings ----
    def set_debug_logging(self, enabled: bool) -> int:
        level = self.settings_vm.set_debug_logging(enabled)
        self.save_settings()
        return level

    def save_settings(self) -> None:
        """Persist settings without clobbering the recent-file bookkeeping."""
        self._refresh_recent()
        self.settings_vm.cmd_save()

    # ---- Helpers ----
    def _show(self, strategy: Strategy) -> None:
        self.board_vm.set_strategy(strategy)
        self.activities_vm.strategy = strategy
        self.document.is_saved = True
        self._emit_document()

    def _refresh_recent(self) -> None:
        stored: Dict = self.storage.load_user_settings()
        self.settings_vm.apply_dict({key: stored[key] for key in _RECENT_KEYS if key in stored})

    def _on_strategy_edited(self, _payload: object) -> None:
        self.document.mark_dirty()
        self._emit_document()

    def _emit_document(self) -> None:
        if self.on_document_changed:
            self.on_document_changed(self.document)
