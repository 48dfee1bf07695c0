from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Protocol, Union

StrategyPath = Union[str, Path]


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class StoragePort(Protocol):
    """Persistence for strategy documents and user settings."""

    def resolve_path(self, path: StrategyPath) -> Path: ...
    def save_strategy(self, path: StrategyPath, payload: Dict[str, Any]) -> Path: ...
    def load_strategy(self, path: StrategyPath) -> Dict[str, Any]: ...
    def save_user_settings(self, payload: Dict[str, Any]) -> None: ...
    def load_user_settings(self) -> Dict[str, Any]: ...
