from __future__ import annotations

import logging

import pytest

from dayplan.utils import logging as logging_utils


@pytest.fixture(autouse=True)
def _restore_root_level(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("DAYPLAN_LOG_LEVEL", raising=False)
    monkeypatch.delenv("DAYPLAN_DEBUG", raising=False)
    root = logging.getLogger()
    previous = root.level
    yield
    root.setLevel(previous)


def test_configure_root_follows_debug_preference() -> None:
    assert logging_utils.configure_root() == logging.INFO
    assert logging_utils.configure_root(debug_enabled=True) == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG


def test_level_env_var_overrides_preference(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DAYPLAN_LOG_LEVEL", "error")

    assert logging_utils.configure_root(debug_enabled=True) == logging.ERROR
    assert logging_utils.apply_preferences(True) == logging.ERROR
    assert logging_utils.env_forces_debug() is False


def test_debug_flag_forces_debug(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DAYPLAN_DEBUG", "on")

    assert logging_utils.env_forces_debug() is True
    assert logging_utils.apply_preferences(False) == logging.DEBUG


def test_unreadable_level_falls_back_to_debug_flag() -> None:
    env = {"DAYPLAN_LOG_LEVEL": "loud", "DAYPLAN_DEBUG": "yes"}

    assert logging_utils.env_level(env) == logging.DEBUG
    assert logging_utils.env_level({}) is None


@pytest.mark.parametrize(
    "text, expected",
    [("10", 10), ("info", logging.INFO), (" Warning ", logging.WARNING), ("nonsense", None), ("  ", None), (None, None)],
)
def test_parse_level(text, expected) -> None:
    assert logging_utils.parse_level(text) == expected
