from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, List, Mapping, Optional

from ..domain.strategy import (
    DEFAULT_BEGIN_TIME,
    DEFAULT_NUMBER_OF_SLOTS,
    DEFAULT_SLOT_DURATION,
    Strategy,
)
from ..utils.logging import apply_preferences, env_forces_debug

MINUTES_PER_DAY = 24 * 60


@dataclass
class SettingsConfig:
    """Typed time settings for new strategies, persisted via StorageLocal."""

    begin_time_min: int = DEFAULT_BEGIN_TIME
    slot_duration_min: int = DEFAULT_SLOT_DURATION
    number_of_slots: int = DEFAULT_NUMBER_OF_SLOTS
    recent_limit: int = 5


class SettingsVM:
    """Keeps app settings state and validation, no I/O here."""

    def __init__(
        self,
        *,
        config: Optional[SettingsConfig] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or SettingsConfig()
        self.on_save = on_save

        self.last_opened_dir: str = ""
        self.last_opened_strategy: str = ""
        self.recent_paths: List[str] = []
        self.debug_logging: bool = env_forces_debug()

    # ------------------------------------------------------------------
    # Properties bridging to the typed config
    # ------------------------------------------------------------------
    @property
    def begin_time_min(self) -> int:
        return self.config.begin_time_min

    @begin_time_min.setter
    def begin_time_min(self, value: int) -> None:
        coerced = self._coerce_int("begin_time_min", value, minimum=0, maximum=MINUTES_PER_DAY - 1)
        self.config = replace(self.config, begin_time_min=coerced)

    @property
    def slot_duration_min(self) -> int:
        return self.config.slot_duration_min

    @slot_duration_min.setter
    def slot_duration_min(self, value: int) -> None:
        coerced = self._coerce_int("slot_duration_min", value, minimum=1)
        self.config = replace(self.config, slot_duration_min=coerced)

    @property
    def number_of_slots(self) -> int:
        return self.config.number_of_slots

    @number_of_slots.setter
    def number_of_slots(self, value: int) -> None:
        coerced = self._coerce_int("number_of_slots", value, minimum=1)
        self.config = replace(self.config, number_of_slots=coerced)

    @property
    def recent_limit(self) -> int:
        return self.config.recent_limit

    @recent_limit.setter
    def recent_limit(self, value: int) -> None:
        coerced = self._coerce_int("recent_limit", value, minimum=0)
        self.config = replace(self.config, recent_limit=coerced)

    # ------------------------------------------------------------------
    def is_valid(self) -> bool:
        span = self.slot_duration_min * self.number_of_slots
        return span <= MINUTES_PER_DAY

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply persisted settings to the view-model."""

        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        allowed_flat_keys = {
            *SettingsConfig.__annotations__.keys(),
            "last_opened_dir",
            "last_opened_strategy",
            "recent_paths",
            "debug_logging",
        }

        unknown = set(payload.keys()) - allowed_flat_keys
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")

        for cfg_key in SettingsConfig.__annotations__.keys():
            if cfg_key in payload:
                setattr(self, cfg_key, payload[cfg_key])

        if "last_opened_dir" in payload:
            self.last_opened_dir = self._coerce_optional_str(payload["last_opened_dir"])

        if "last_opened_strategy" in payload:
            self.last_opened_strategy = self._coerce_optional_str(payload["last_opened_strategy"])

        if "recent_paths" in payload:
            self.recent_paths = self._coerce_path_list(payload["recent_paths"])

        if "debug_logging" in payload:
            self.debug_logging = self._coerce_bool(payload["debug_logging"])

    def to_dict(self) -> dict:
        snapshot = asdict(self.config)
        snapshot.update(
            {
                "last_opened_dir": self.last_opened_dir,
                "last_opened_strategy": self.last_opened_strategy,
                "recent_paths": list(self.recent_paths),
                "debug_logging": bool(self.debug_logging),
            }
        )
        return snapshot

    def set_debug_logging(self, enabled: bool) -> int:
        """Store the flag and apply it to the root logger; returns the level."""
        self.debug_logging = self._coerce_bool(enabled)
        return apply_preferences(self.debug_logging)

    def build_strategy(self) -> Strategy:
        """Return an empty strategy using the configured time settings."""
        return Strategy(
            self.number_of_slots,
            begin_time=self.begin_time_min,
            slot_duration=self.slot_duration_min,
        )

    def cmd_save(self) -> None:
        if not self.is_valid():
            raise ValueError("Settings invalid: the slots do not fit into one day.")
        if self.on_save:
            self.on_save(self.to_dict())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _coerce_optional_str(value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def _coerce_int(
        name: str,
        value: Any,
        *,
        minimum: Optional[int] = None,
        maximum: Optional[int] = None,
    ) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        if isinstance(value, (int, float)):
            coerced = int(value)
        elif isinstance(value, str):
            try:
                coerced = int(value.strip())
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{name} must be an integer.") from exc
        else:
            raise ValueError(f"{name} must be an integer.")
        if minimum is not None and coerced < minimum:
            raise ValueError(f"{name} must be at least {minimum}.")
        if maximum is not None and coerced > maximum:
            raise ValueError(f"{name} must be at most {maximum}.")
        return coerced

    @staticmethod
    def _coerce_path_list(value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str) or not isinstance(value, (list, tuple)):
            raise ValueError("recent_paths must be a list of paths.")
        paths: List[str] = []
        for item in value:
            token = str(item).strip()
            if token and token not in paths:
                paths.append(token)
        return paths


def default_settings_payload() -> dict:
    """Return a fresh snapshot containing the default settings payload."""
    return SettingsVM().to_dict()
