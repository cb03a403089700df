"""Tests for the database task source."""

import asyncio
from datetime import datetime

import pytest

from database.models import Base
from database.operations import (
    DatabaseTaskSource,
    add_assignee,
    add_schedule_task,
    add_task_dependency,
    create_schedule,
    engine,
    get_schedule_tasks,
    init_db,
)
from planning.exceptions import ScheduleNotFoundError
from planning.models import Priority
from planning.report import build_report


@pytest.fixture
def db():
    init_db()
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture
def schedule_id(db):
    """Schedule with a three-task chain and one assignee."""
    schedule_id = create_schedule("Subestación Norte")
    ana_id = add_assignee("Ana Torres", email="ana@example.com")

    survey = add_schedule_task(
        schedule_id, "Levantamiento", 8, priority="high", progress=100, actual_hours=9,
        assignee_id=ana_id, start_date=datetime(2025, 3, 3), end_date=datetime(2025, 3, 7),
        actual_end_date=datetime(2025, 3, 8),
    )
    design = add_schedule_task(
        schedule_id, "Ingeniería", 35, progress=50, assignee_id=ana_id, state="en_progreso",
        start_date=datetime(2025, 3, 10), end_date=datetime(2025, 3, 21),
    )
    delivery = add_schedule_task(schedule_id, "Entrega", 4, description="Acta, planos y manuales")
    add_task_dependency(design, survey)
    add_task_dependency(delivery, design)
    return schedule_id


class TestOperations:
    """Tests for the database helpers."""

    def test_add_assignee_reuses_existing(self, db):
        """Adding the same name twice should return the same id."""
        assert add_assignee("Luis Rojas") == add_assignee("Luis Rojas")

    def test_get_schedule_tasks(self, schedule_id):
        """Rows should become planning tasks with string ids."""
        tasks = get_schedule_tasks(schedule_id)
        assert [task.name for task in tasks] == ["Levantamiento", "Ingeniería", "Entrega"]

        survey, design, delivery = tasks
        assert survey.priority is Priority.HIGH
        assert survey.assignee.name == "Ana Torres"
        assert survey.assignee.id == design.assignee.id
        assert design.dependencies == (survey.id,)
        assert delivery.dependencies == (design.id,)
        assert delivery.assignee is None
        assert delivery.state == "pendiente"
        assert delivery.description == "Acta, planos y manuales"
        assert survey.actual_end_date == datetime(2025, 3, 8)

    def test_missing_schedule(self, db):
        """An unknown schedule should raise ScheduleNotFoundError."""
        with pytest.raises(ScheduleNotFoundError):
            get_schedule_tasks(999)

    def test_empty_schedule(self, db):
        """A schedule without tasks should give an empty list."""
        assert get_schedule_tasks(create_schedule("Vacío")) == []


class TestDatabaseTaskSource:
    """Tests for DatabaseTaskSource."""

    def test_fetch_tasks(self, schedule_id):
        """The async source should return the same tasks."""
        tasks = asyncio.run(DatabaseTaskSource().fetch_tasks(schedule_id))
        assert len(tasks) == 3

    def test_report_from_database(self, schedule_id):
        """A full report should be built from stored tasks."""
        report = asyncio.run(build_report(schedule_id, DatabaseTaskSource()))
        assert report.critical_path.total_duration == 47
        assert [task.name for task in report.critical_path.path_tasks] == ["Levantamiento", "Ingeniería", "Entrega"]
        assert report.metrics.delay_days == 1
        assert report.metrics.completed_hours == 9
        ana_id = report.tasks[0].assignee.id
        assert report.workload.overloaded_assignees == [ana_id]

    def test_missing_schedule_propagates(self, db):
        """Fetch errors should reach the report caller."""
        with pytest.raises(ScheduleNotFoundError):
            asyncio.run(build_report(404, DatabaseTaskSource()))
