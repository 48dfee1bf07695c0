from __future__ import annotations
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict

from dayplan.domain.ports import StoragePort, StrategyPath

log = logging.getLogger(__name__)


class StorageLocal(StoragePort):
    """Local filesystem storage for strategy documents and user settings (JSON)."""

    SETTINGS_FILENAME = "user_settings.json"
    STRATEGY_SUFFIX = ".json"

    def __init__(self, root_dir: str = ".") -> None:
        self.root = Path(root_dir)

    def resolve_path(self, path: StrategyPath) -> Path:
        """Anchor relative paths at ``root`` and append the ``.json`` suffix."""
        resolved = Path(path).expanduser()
        if not resolved.is_absolute():
            resolved = self.root / resolved
        if resolved.suffix != self.STRATEGY_SUFFIX:
            resolved = resolved.with_name(resolved.name + self.STRATEGY_SUFFIX)
        return resolved

    # ---- Strategies (JSON) ----
    def save_strategy(self, path: StrategyPath, payload: Dict[str, Any]) -> Path:
        target = self.resolve_path(path)
        self._write_json_atomic(target, payload)
        log.info("Saved strategy to %s", target)
        return target

    def load_strategy(self, path: StrategyPath) -> Dict[str, Any]:
        target = self.resolve_path(path)
        with target.open("r", encoding="utf-8") as f:
            payload = json.load(f)
        if not isinstance(payload, dict):
            raise ValueError(f"{target} does not contain a strategy object.")
        log.info("Loaded strategy from %s", target)
        return payload

    # ---- User settings (JSON) ----
    def save_user_settings(self, payload: Dict[str, Any]) -> None:
        self._write_json_atomic(self.root / self.SETTINGS_FILENAME, payload)

    def load_user_settings(self) -> Dict[str, Any]:
        path = self.root / self.SETTINGS_FILENAME
        if not path.exists():
            return {}
        with path.open("r", encoding="utf-8") as f:
            payload = json.load(f)
        if not isinstance(payload, dict):
            raise ValueError(f"{path} does not contain a settings object.")
        return payload

    @staticmethod
    def _write_json_atomic(path: Path, payload: Dict[str, Any]) -> None:
        """Write JSON next to ``path`` first, then move it into place."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=str(path.parent), prefix=f"{path.stem}_", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
                f.write("\n")
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise
