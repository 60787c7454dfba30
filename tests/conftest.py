"""Shared pytest fixtures for TomatoTimer tests."""

import os
import sys
import tempfile

# Headless Qt and a throwaway app-support dir, before any app import.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("TOMATOTIMER_HOME", tempfile.mkdtemp(prefix="tomatotimer-"))

import pytest

from PyQt6.QtWidgets import QApplication

from tomatotimer.database.db import configure_engine, init_db
from tomatotimer.platform.clock import FakeClock
from tomatotimer.timer.engine import TimerEngine
from tomatotimer.timer.runner import EffectRunner

from helpers import FakeNotifier, FakeScheduler, FakeSound, MemoryStore


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def clock():
    return FakeClock(0.0)


@pytest.fixture
def sound():
    return FakeSound()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def runner(sound, scheduler, notifier, store):
    return EffectRunner(
        sound=sound, scheduler=scheduler, notifier=notifier, store=store,
    )


@pytest.fixture
def engine(qapp, clock, runner):
    """Fresh TimerEngine on a fake clock with recording collaborators."""
    return TimerEngine(parent=None, clock=clock, runner=runner)
