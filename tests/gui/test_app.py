"""Tests for GUI entry point helpers."""

from __future__ import annotations

import pytest

from nonblocking.gui.app import _env_bool, _env_int


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("yes", True), ("ON", True), ("0", False), ("off", False), ("maybe", None)],
)
def test_env_bool(monkeypatch: pytest.MonkeyPatch, raw: str, expected) -> None:
    monkeypatch.setenv("NONBLOCKING_TEST_FLAG", raw)
    default = True
    result = _env_bool("NONBLOCKING_TEST_FLAG", default)
    assert result == (default if expected is None else expected)


def test_env_bool_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NONBLOCKING_TEST_FLAG", raising=False)
    assert _env_bool("NONBLOCKING_TEST_FLAG", False) is False


def test_env_int(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NONBLOCKING_TEST_PORT", "8123")
    assert _env_int("NONBLOCKING_TEST_PORT", 1) == 8123
    monkeypatch.setenv("NONBLOCKING_TEST_PORT", "abc")
    assert _env_int("NONBLOCKING_TEST_PORT", 1) == 1
    monkeypatch.delenv("NONBLOCKING_TEST_PORT")
    assert _env_int("NONBLOCKING_TEST_PORT", 7) == 7
