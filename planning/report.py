# planning/report.py
"""
Composite schedule report: metrics, timeline, critical path and workload
"""
from typing import List, Protocol

from logger import logger
from planning.metrics import calculate_metrics
from planning.models import ScheduleReport, Task, TaskGraph
from planning.network import find_critical_path
from planning.timeline import build_timeline
from planning.workload import analyze_workload


class TaskSource(Protocol):
    """Supplies the tasks of a schedule."""

    async def fetch_tasks(self, schedule_id) -> List[Task]:
        ...


async def build_report(schedule_id, task_source: TaskSource, overload_threshold=None) -> ScheduleReport:
    """
    Fetches the tasks of a schedule and runs every analysis over them.

    Errors raised by the task source and by the analyses are not caught: the
    report is built completely or not at all.

    Args:
        schedule_id: Schedule identifier understood by the task source
        task_source: Object with an async fetch_tasks(schedule_id) method
        overload_threshold: Workload overload threshold in hours

    Returns:
        ScheduleReport
    """
    logger.info(f"Building report for schedule {schedule_id}")
    tasks = await task_source.fetch_tasks(schedule_id)

    graph = TaskGraph(tasks)

    report = ScheduleReport(
        schedule_id=schedule_id,
        tasks=graph.tasks,
        metrics=calculate_metrics(graph),
        timeline=build_timeline(graph),
        critical_path=find_critical_path(graph),
        workload=analyze_workload(graph, overload_threshold)
    )

    logger.info(f"Report for schedule {schedule_id} ready: {len(graph)} tasks")
    return report
