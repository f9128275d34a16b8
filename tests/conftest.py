"""Pytest configuration and fixtures."""

import os
from datetime import date, datetime
from pathlib import Path
from typing import Callable

import pytest

from vaultlevel.config import TrackerConfig
from vaultlevel.tracker import LevelTracker

TODAY = date(2024, 3, 10)


def noon(day: date) -> float:
    """Local-time epoch seconds for midday on ``day``."""
    return datetime(day.year, day.month, day.day, 12, 0).timestamp()


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class WallClock:
    """Manually set local wall clock."""

    def __init__(self, day: date):
        self.set(day)

    def set(self, day: date) -> None:
        self.current = datetime(day.year, day.month, day.day, 18, 0)

    def __call__(self) -> datetime:
        return self.current


@pytest.fixture
def vault_path(tmp_path: Path) -> Path:
    vault = tmp_path / "vault"
    (vault / ".obsidian").mkdir(parents=True)
    return vault


@pytest.fixture
def write_note(vault_path: Path) -> Callable[..., Path]:
    """Write a note into the vault, stamping its modification time."""

    def _write(name: str, text: str, day: date | None = TODAY) -> Path:
        path = vault_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        if day is not None:
            ts = noon(day)
            os.utime(path, (ts, ts))
        return path

    return _write


@pytest.fixture
def wall_clock() -> WallClock:
    return WallClock(TODAY)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_tracker(vault_path: Path, wall_clock: WallClock, fake_clock: FakeClock) -> Callable[..., LevelTracker]:
    def _make(config: TrackerConfig | None = None) -> LevelTracker:
        return LevelTracker(vault_path, config=config, now=wall_clock, monotonic=fake_clock)

    return _make
