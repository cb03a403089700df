"""
Errors raised by the schedule analytics engine
"""


class ScheduleAnalyticsError(Exception):
    """Base class for schedule analytics errors."""


class TaskGraphError(ScheduleAnalyticsError, ValueError):
    """The task list of a schedule is malformed."""


class CyclicDependencyError(TaskGraphError):
    """Task dependencies form a cycle."""

    def __init__(self, cycle, names=None):
        self.cycle = list(cycle)
        labels = names or [str(task_id) for task_id in self.cycle]
        super().__init__(f"Cyclic dependency: {' -> '.join(labels)}")


class ScheduleNotFoundError(ScheduleAnalyticsError, LookupError):
    """No schedule exists with the requested id."""

    def __init__(self, schedule_id):
        self.schedule_id = schedule_id
        super().__init__(f"Schedule {schedule_id} not found")


class UnsupportedExportFormatError(ScheduleAnalyticsError, ValueError):
    """The requested export format is not available."""

    def __init__(self, fmt, supported=("json", "csv")):
        self.format = fmt
        super().__init__(f"Unsupported export format: {fmt!r} (expected one of: {', '.join(supported)})")
