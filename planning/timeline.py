# planning/timeline.py
"""
Project timeline with milestones
"""
import math
from datetime import datetime, time, timedelta

from logger import logger
from planning.models import Milestone, MilestoneKind, Priority, TaskGraph, Timeline

START_DESCRIPTION = "Inicio del proyecto"
FINISH_DESCRIPTION = "Fin del proyecto"


def build_timeline(tasks, today=None):
    """
    Builds the project timeline.

    Args:
        tasks: TaskGraph or list of tasks
        today: Date or datetime used as start when no task has a start date

    Returns:
        Timeline with dates as YYYY-MM-DD strings
    """
    graph = TaskGraph.of(tasks)
    today = today or datetime.now()
    if isinstance(today, datetime):
        today = today.date()
    today = datetime.combine(today, time())

    start_dates = [task.start_date for task in graph.tasks if task.start_date]
    end_dates = [task.end_date for task in graph.tasks if task.end_date]

    start = min(start_dates) if start_dates else today
    end = max(end_dates) if end_dates else start
    duration_days = math.ceil((end - start) / timedelta(days=1))

    # (moment, milestone) pairs, sorted on the moment so ties keep insertion order
    events = [(start, Milestone(_format_date(start), START_DESCRIPTION, MilestoneKind.START))]

    for task in graph.tasks:
        if task.priority == Priority.HIGH and task.end_date:
            events.append((task.end_date, Milestone(_format_date(task.end_date), task.name, MilestoneKind.WAYPOINT)))

    if end != start:
        events.append((end, Milestone(_format_date(end), FINISH_DESCRIPTION, MilestoneKind.FINISH)))

    events.sort(key=lambda event: event[0])

    timeline = Timeline(
        start=_format_date(start),
        end=_format_date(end),
        duration_days=duration_days,
        milestones=[milestone for _, milestone in events]
    )
    logger.info(f"Timeline: {timeline.start} - {timeline.end}, {duration_days} days, "
                f"{len(timeline.milestones)} milestones")
    return timeline


def _format_date(value):
    return value.date().isoformat()
