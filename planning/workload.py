# planning/workload.py
"""
Workload of the people assigned to a schedule
"""
import config
from logger import logger
from planning.models import UNASSIGNED_ID, UNASSIGNED_NAME, AssigneeLoad, TaskGraph, Workload
from utils.rounding import round_half_up, safe_percentage


def analyze_workload(tasks, overload_threshold=None):
    """
    Groups tasks by assignee and sums their effort.

    Tasks without an assignee are gathered under the "unassigned" bucket.

    Args:
        tasks: TaskGraph or list of tasks
        overload_threshold: Estimated hours above which an assignee is
            overloaded (defaults to OVERLOAD_THRESHOLD_HOURS)

    Returns:
        Workload
    """
    if overload_threshold is None:
        overload_threshold = config.OVERLOAD_THRESHOLD_HOURS
    if overload_threshold < 0:
        raise ValueError(f"Overload threshold cannot be negative: {overload_threshold}")

    graph = TaskGraph.of(tasks)

    load_by_assignee = {}
    progress_by_assignee = {}

    for task in graph.tasks:
        if task.assignee:
            assignee_id, assignee_name = task.assignee.id, task.assignee.name
        else:
            assignee_id, assignee_name = UNASSIGNED_ID, UNASSIGNED_NAME

        if assignee_id not in load_by_assignee:
            load_by_assignee[assignee_id] = AssigneeLoad(assignee_name=assignee_name)
            progress_by_assignee[assignee_id] = []

        load = load_by_assignee[assignee_id]
        load.total_tasks += 1
        load.estimated_hours += task.estimated_hours
        load.actual_hours += task.actual_hours or 0
        progress_by_assignee[assignee_id].append(task.progress)

    overloaded = []
    for assignee_id, load in load_by_assignee.items():
        progress = progress_by_assignee[assignee_id]
        load.average_progress = round_half_up(sum(progress) / len(progress))
        # Planned over actual: below 100 means the estimate was overrun
        load.efficiency = safe_percentage(load.estimated_hours, load.actual_hours)
        load.load_percentage = safe_percentage(load.estimated_hours, overload_threshold)

        if load.estimated_hours > overload_threshold:
            overloaded.append(assignee_id)
            logger.warning(f"Assignee {load.assignee_name} is overloaded: "
                           f"{load.estimated_hours} h estimated, threshold {overload_threshold} h")

    logger.info(f"Workload: {len(load_by_assignee)} assignees, {len(overloaded)} overloaded")
    return Workload(
        load_by_assignee=load_by_assignee,
        overloaded_assignees=overloaded,
        overload_threshold=overload_threshold
    )
