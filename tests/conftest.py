"""Pytest configuration and fixtures."""
import os
import tempfile

# Point the database and log file at a scratch directory before config is imported
_scratch_dir = tempfile.mkdtemp(prefix="schedule_analytics_tests_")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_scratch_dir, "test.db")
os.environ["LOG_FILE"] = os.path.join(_scratch_dir, "test.log")
os.environ["OVERLOAD_THRESHOLD_HOURS"] = "40"

from datetime import datetime

import pytest

from planning.models import Assignee, Priority, Task


def make_task(task_id, estimated_hours=0, **fields):
    """Builds a Task with sensible defaults."""
    fields.setdefault("name", f"Task {task_id}")
    return Task(id=task_id, estimated_hours=estimated_hours, **fields)


@pytest.fixture
def abc_tasks():
    """A(5h, done), B(10h, half, after A), C(3h, pending)."""
    return [
        make_task("A", 5, progress=100),
        make_task("B", 10, progress=50, dependencies=("A",)),
        make_task("C", 3, progress=0),
    ]


@pytest.fixture
def ana():
    return Assignee(id="u1", name="Ana Torres")


@pytest.fixture
def luis():
    return Assignee(id="u2", name="Luis Rojas")


@pytest.fixture
def dated_tasks(ana, luis):
    """Tasks with planned and real dates, one finished late."""
    return [
        make_task(
            "T1", 8, name="Levantamiento", progress=100, actual_hours=10,
            priority=Priority.HIGH, assignee=ana,
            start_date=datetime(2025, 3, 3), end_date=datetime(2025, 3, 7),
            actual_start_date=datetime(2025, 3, 4), actual_end_date=datetime(2025, 3, 10),
        ),
        make_task(
            "T2", 16, name="Ingeniería", progress=40, actual_hours=6,
            assignee=luis, dependencies=("T1",),
            start_date=datetime(2025, 3, 10), end_date=datetime(2025, 3, 21),
            actual_start_date=datetime(2025, 3, 11),
        ),
        make_task(
            "T3", 4, name="Entrega", priority=Priority.HIGH, dependencies=("T2",),
            start_date=datetime(2025, 3, 24), end_date=datetime(2025, 3, 28),
        ),
    ]
