"""Shared pytest fixtures for IntervalWatch tests."""

import sys

import pytest

from PyQt6.QtCore import QCoreApplication

from intervalwatch.database.db import configure_engine, init_db
from intervalwatch.timer.engine import WorkoutTimerEngine

from helpers import FIXED_NOW


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def engine():
    """Fresh engine: 1 round, no rest, halfway off, fixed clock."""
    return WorkoutTimerEngine(rest_seconds=0, clock=lambda: FIXED_NOW)


@pytest.fixture
def engine_halfway():
    return WorkoutTimerEngine(
        rest_seconds=0, halfway_enabled=True, clock=lambda: FIXED_NOW,
    )
