"""Tests for the timeline builder."""

from datetime import datetime, date

from conftest import make_task
from planning.models import MilestoneKind, Priority
from planning.timeline import FINISH_DESCRIPTION, START_DESCRIPTION, build_timeline

TODAY = datetime(2025, 6, 1, 15, 30)


class TestBuildTimeline:
    """Tests for build_timeline."""

    def test_empty_schedule(self):
        """No tasks should give a zero-length timeline starting today."""
        timeline = build_timeline([], today=TODAY)
        assert timeline.start == "2025-06-01"
        assert timeline.end == "2025-06-01"
        assert timeline.duration_days == 0
        assert len(timeline.milestones) == 1
        assert timeline.milestones[0].kind == MilestoneKind.START
        assert timeline.milestones[0].description == START_DESCRIPTION

    def test_plain_date_for_today(self):
        """A date object should be accepted as today."""
        timeline = build_timeline([], today=date(2025, 6, 1))
        assert timeline.start == "2025-06-01"
        assert timeline.duration_days == 0

    def test_plain_date_with_dated_tasks(self):
        """A date object for today should not clash with task datetimes."""
        tasks = [make_task("1", end_date=datetime(2025, 6, 4, 12))]
        timeline = build_timeline(tasks, today=date(2025, 6, 1))
        assert timeline.start == "2025-06-01"
        assert timeline.end == "2025-06-04"
        assert timeline.duration_days == 4

    def test_dated_schedule(self, dated_tasks):
        """Bounds and duration should come from task dates."""
        timeline = build_timeline(dated_tasks, today=TODAY)
        assert timeline.start == "2025-03-03"
        assert timeline.end == "2025-03-28"
        assert timeline.duration_days == 25

    def test_milestones_sorted_with_stable_ties(self, dated_tasks):
        """Waypoints for high-priority tasks should sit between start and finish."""
        timeline = build_timeline(dated_tasks, today=TODAY)
        assert [(m.date, m.kind) for m in timeline.milestones] == [
            ("2025-03-03", MilestoneKind.START),
            ("2025-03-07", MilestoneKind.WAYPOINT),
            ("2025-03-28", MilestoneKind.WAYPOINT),
            ("2025-03-28", MilestoneKind.FINISH),
        ]
        assert timeline.milestones[1].description == "Levantamiento"
        assert timeline.milestones[2].description == "Entrega"
        assert timeline.milestones[3].description == FINISH_DESCRIPTION

    def test_no_end_dates(self):
        """End should equal start and no finish milestone should be added."""
        tasks = [make_task("1", start_date=datetime(2025, 2, 1))]
        timeline = build_timeline(tasks, today=TODAY)
        assert timeline.end == timeline.start == "2025-02-01"
        assert timeline.duration_days == 0
        assert [m.kind for m in timeline.milestones] == [MilestoneKind.START]

    def test_partial_days_round_up(self):
        """Duration should be the ceiling of the elapsed days."""
        tasks = [make_task("1", start_date=datetime(2025, 2, 1, 8), end_date=datetime(2025, 2, 3, 17))]
        assert build_timeline(tasks, today=TODAY).duration_days == 3

    def test_high_priority_without_end_date(self):
        """High-priority tasks without an end date add no waypoint."""
        tasks = [
            make_task("1", priority=Priority.HIGH, start_date=datetime(2025, 2, 1)),
            make_task("2", priority=Priority.LOW, start_date=datetime(2025, 2, 1), end_date=datetime(2025, 2, 5)),
        ]
        kinds = [m.kind for m in build_timeline(tasks, today=TODAY).milestones]
        assert kinds == [MilestoneKind.START, MilestoneKind.FINISH]

    def test_waypoint_before_start(self):
        """A waypoint earlier than the start should sort first."""
        tasks = [
            make_task("1", start_date=datetime(2025, 2, 10), end_date=datetime(2025, 2, 20)),
            make_task("2", priority=Priority.HIGH, end_date=datetime(2025, 2, 5)),
        ]
        milestones = build_timeline(tasks, today=TODAY).milestones
        assert milestones[0].kind == MilestoneKind.WAYPOINT
        assert milestones[0].date == "2025-02-05"
