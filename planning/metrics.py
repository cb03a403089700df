# planning/metrics.py
"""
Aggregate progress metrics of a schedule
"""
import math
from datetime import datetime, timedelta

from logger import logger
from planning.models import GanttMetrics, TaskGraph
from utils.rounding import round_half_up, safe_percentage

ONE_DAY = timedelta(days=1)


def calculate_metrics(tasks, now=None):
    """
    Calculates the aggregate metrics of a schedule.

    Args:
        tasks: TaskGraph or list of tasks
        now: Reference moment used when the schedule has no dates

    Returns:
        GanttMetrics
    """
    graph = TaskGraph.of(tasks)
    now = now or datetime.now()

    if not graph.tasks:
        logger.warning("No tasks to calculate metrics for")
        return GanttMetrics(
            progress_overall=0,
            total_hours=0,
            completed_hours=0,
            efficiency=0,
            project_start=now,
            project_end=now,
            total_tasks=0,
            completed_tasks=0,
            pending_tasks=0,
            in_progress_tasks=0,
            delay_days=0
        )

    total_tasks = len(graph.tasks)
    completed_tasks = sum(1 for task in graph.tasks if task.progress == 100)
    pending_tasks = sum(1 for task in graph.tasks if task.progress == 0)

    total_hours = sum(task.estimated_hours for task in graph.tasks)
    completed_hours = sum(task.actual_hours or 0 for task in graph.tasks)

    start_dates = [task.start_date for task in graph.tasks if task.start_date]
    end_dates = [task.end_date for task in graph.tasks if task.end_date]
    actual_starts = [task.actual_start_date for task in graph.tasks if task.actual_start_date]
    actual_ends = [task.actual_end_date for task in graph.tasks if task.actual_end_date]

    metrics = GanttMetrics(
        progress_overall=round_half_up(sum(task.progress for task in graph.tasks) / total_tasks),
        total_hours=total_hours,
        completed_hours=completed_hours,
        efficiency=safe_percentage(completed_hours, total_hours),
        project_start=min(start_dates) if start_dates else now,
        project_end=max(end_dates) if end_dates else now,
        total_tasks=total_tasks,
        completed_tasks=completed_tasks,
        pending_tasks=pending_tasks,
        in_progress_tasks=total_tasks - completed_tasks - pending_tasks,
        delay_days=calculate_delay_days(graph.tasks),
        actual_start=min(actual_starts) if actual_starts else None,
        actual_end=max(actual_ends) if actual_ends else None
    )

    logger.info(
        f"Metrics: {total_tasks} tasks, progress {metrics.progress_overall}%, "
        f"hours {completed_hours}/{total_hours}, delay {metrics.delay_days} days"
    )
    return metrics


def calculate_delay_days(tasks):
    """Largest delay in whole days among finished tasks, never negative."""
    delay_days = 0
    for task in tasks:
        if task.actual_end_date and task.end_date:
            delay = math.ceil((task.actual_end_date - task.end_date) / ONE_DAY)
            delay_days = max(delay_days, delay)
    return delay_days
