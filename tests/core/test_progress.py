"""Tests for progress constants and helpers."""

from __future__ import annotations

from nonblocking.core.utils.progress import INITIAL_PROGRESS, MAX_STEPS, progress_fraction


def test_constants() -> None:
    assert MAX_STEPS == 100_000
    assert INITIAL_PROGRESS == 0


def test_progress_fraction_bounds() -> None:
    assert progress_fraction(0) == 0.0
    assert progress_fraction(MAX_STEPS - 1) == 1.0
    assert progress_fraction(-5) == 0.0
    assert progress_fraction(MAX_STEPS * 2) == 1.0


def test_progress_fraction_midpoint() -> None:
    assert progress_fraction(5, max_steps=11) == 0.5


def test_progress_fraction_degenerate_range() -> None:
    assert progress_fraction(3, max_steps=1) == 0.0
