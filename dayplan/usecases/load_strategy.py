from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from ..domain.ports import StoragePort, StrategyPath, UseCaseError
from ..domain.serialization import strategy_from_payload
from ..domain.strategy import Strategy
from .recent_strategies import remember_opened
from .strategy_document import StrategyDocument


@dataclass
class LoadStrategy:
    storage: StoragePort
    document: StrategyDocument = field(default_factory=StrategyDocument)

    def __call__(self, path: StrategyPath) -> Strategy:
        try:
            resolved = self.storage.resolve_path(path)
            strategy = strategy_from_payload(self.storage.load_strategy(resolved))
            remember_opened(self.storage, resolved)
        except Exception as e:
            raise UseCaseError("LOAD_STRATEGY_FAILED", str(e)) from e
        self.document.path = str(resolved)
        self.document.is_saved = True
        return strategy


@dataclass
class LoadLastOpenedStrategy:
    """Reopen the strategy recorded as last opened, if any."""

    storage: StoragePort
    document: StrategyDocument = field(default_factory=StrategyDocument)

    def __call__(self) -> Optional[Strategy]:
        try:
            last = self.storage.load_user_settings().get("last_opened_strategy")
        except Exception as e:
            raise UseCaseError("LOAD_STRATEGY_FAILED", str(e)) from e
        if not last:
            return None
        return LoadStrategy(self.storage, self.document)(last)
