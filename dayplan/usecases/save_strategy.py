from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..domain.ports import StoragePort, StrategyPath, UseCaseError
from ..domain.serialization import strategy_to_payload
from ..domain.strategy import Strategy
from .recent_strategies import remember_opened
from .strategy_document import StrategyDocument


@dataclass
class SaveStrategy:
    """Write a strategy to ``path`` (save as) or to the document's current file."""

    storage: StoragePort
    document: StrategyDocument = field(default_factory=StrategyDocument)

    def __call__(self, strategy: Strategy, path: Optional[StrategyPath] = None) -> Path:
        target = path if path is not None else self.document.path
        if not target:
            raise UseCaseError("NO_STRATEGY_PATH", "Choose a file to save the strategy to.")
        try:
            saved = self.storage.save_strategy(target, strategy_to_payload(strategy))
            remember_opened(self.storage, saved)
        except Exception as e:
            raise UseCaseError("SAVE_STRATEGY_FAILED", str(e)) from e
        self.document.path = str(saved)
        self.document.is_saved = True
        return saved
