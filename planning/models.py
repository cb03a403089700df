from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from logger import logger
from planning.exceptions import TaskGraphError

UNASSIGNED_ID = "unassigned"
UNASSIGNED_NAME = "Unassigned"


class Priority(str, Enum):
    """Task priority."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MilestoneKind(str, Enum):
    START = "start"
    FINISH = "finish"
    WAYPOINT = "waypoint"


def _iso(value):
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class Assignee:
    """Person responsible for a task."""
    id: str
    name: str


@dataclass(frozen=True)
class Task:
    """
    Schedulable unit of work.

    Dates are planned (start_date, end_date) or real (actual_*). A task is late
    when actual_end_date falls after end_date.
    """
    id: str
    name: str
    state: str = "pendiente"
    priority: Priority = Priority.MEDIUM
    progress: int = 0
    estimated_hours: float = 0
    actual_hours: Optional[float] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    actual_start_date: Optional[datetime] = None
    actual_end_date: Optional[datetime] = None
    assignee: Optional[Assignee] = None
    dependencies: Tuple[str, ...] = ()
    description: Optional[str] = None

    def __post_init__(self):
        if not 0 <= self.progress <= 100:
            raise ValueError(f"Task {self.id}: progress must be between 0 and 100, got {self.progress}")
        if self.estimated_hours < 0:
            raise ValueError(f"Task {self.id}: estimated hours cannot be negative")
        if self.actual_hours is not None and self.actual_hours < 0:
            raise ValueError(f"Task {self.id}: actual hours cannot be negative")
        # Duplicates removed, first occurrence order kept
        object.__setattr__(self, 'dependencies', tuple(dict.fromkeys(self.dependencies)))
        object.__setattr__(self, 'priority', Priority(self.priority))

    @property
    def is_late(self):
        return (self.actual_end_date is not None and self.end_date is not None
                and self.actual_end_date > self.end_date)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'state': self.state,
            'priority': self.priority.value,
            'progress': self.progress,
            'estimated_hours': self.estimated_hours,
            'actual_hours': self.actual_hours,
            'start_date': _iso(self.start_date),
            'end_date': _iso(self.end_date),
            'actual_start_date': _iso(self.actual_start_date),
            'actual_end_date': _iso(self.actual_end_date),
            'assignee': {'id': self.assignee.id, 'name': self.assignee.name} if self.assignee else None,
            'dependencies': list(self.dependencies),
            'description': self.description,
        }


class TaskGraph:
    """
    Task list of one schedule.

    Task ids are unique. Dependency ids that do not belong to the graph are
    ignored by the analyses and reported once as a warning.
    """

    def __init__(self, tasks):
        self.tasks: List[Task] = list(tasks)
        self.tasks_by_id: Dict[str, Task] = {}

        for task in self.tasks:
            if task.id in self.tasks_by_id:
                logger.error(f"Duplicate task id in schedule: {task.id}")
                raise TaskGraphError(f"Duplicate task id: {task.id}")
            self.tasks_by_id[task.id] = task

        self.dangling = [
            (task.id, dep_id)
            for task in self.tasks
            for dep_id in task.dependencies
            if dep_id not in self.tasks_by_id
        ]
        for task_id, dep_id in self.dangling:
            logger.warning(f"Task {task_id} depends on unknown task {dep_id}, dependency ignored")

    def __len__(self):
        return len(self.tasks)

    def __iter__(self):
        return iter(self.tasks)

    def dependencies_of(self, task):
        """Prerequisite ids of a task that resolve inside the graph."""
        return [dep_id for dep_id in task.dependencies if dep_id in self.tasks_by_id]

    @classmethod
    def of(cls, tasks):
        return tasks if isinstance(tasks, TaskGraph) else cls(tasks)


@dataclass
class Milestone:
    date: str
    description: str
    kind: MilestoneKind

    def to_dict(self):
        return {'date': self.date, 'description': self.description, 'kind': self.kind.value}


@dataclass
class GanttMetrics:
    """Aggregate progress metrics of a schedule."""
    progress_overall: int
    total_hours: float
    completed_hours: float
    efficiency: int
    project_start: datetime
    project_end: datetime
    total_tasks: int
    completed_tasks: int
    pending_tasks: int
    in_progress_tasks: int
    delay_days: int
    actual_start: Optional[datetime] = None
    actual_end: Optional[datetime] = None

    def to_dict(self):
        return {
            'progress_overall': self.progress_overall,
            'total_hours': self.total_hours,
            'completed_hours': self.completed_hours,
            'efficiency': self.efficiency,
            'project_start': _iso(self.project_start),
            'project_end': _iso(self.project_end),
            'actual_start': _iso(self.actual_start),
            'actual_end': _iso(self.actual_end),
            'total_tasks': self.total_tasks,
            'completed_tasks': self.completed_tasks,
            'pending_tasks': self.pending_tasks,
            'in_progress_tasks': self.in_progress_tasks,
            'delay_days': self.delay_days,
        }


@dataclass
class Timeline:
    start: str
    end: str
    duration_days: int
    milestones: List[Milestone] = field(default_factory=list)

    def to_dict(self):
        return {
            'start': self.start,
            'end': self.end,
            'duration_days': self.duration_days,
            'milestones': [milestone.to_dict() for milestone in self.milestones],
        }


@dataclass
class CriticalPath:
    """Longest dependency chain by estimated hours."""
    path_ids: List[str] = field(default_factory=list)
    path_tasks: List[Task] = field(default_factory=list)
    total_duration: float = 0

    def contains(self, task_id):
        return task_id in self.path_ids

    def to_dict(self):
        return {
            'path_ids': list(self.path_ids),
            'path_tasks': [task.to_dict() for task in self.path_tasks],
            'total_duration': self.total_duration,
        }


@dataclass
class AssigneeLoad:
    """Effort and progress of one assignee."""
    assignee_name: str
    total_tasks: int = 0
    estimated_hours: float = 0
    actual_hours: float = 0
    average_progress: int = 0
    efficiency: int = 0
    load_percentage: int = 0

    def to_dict(self):
        return {
            'assignee_name': self.assignee_name,
            'total_tasks': self.total_tasks,
            'estimated_hours': self.estimated_hours,
            'actual_hours': self.actual_hours,
            'average_progress': self.average_progress,
            'efficiency': self.efficiency,
            'load_percentage': self.load_percentage,
        }


@dataclass
class Workload:
    load_by_assignee: Dict[str, AssigneeLoad] = field(default_factory=dict)
    overloaded_assignees: List[str] = field(default_factory=list)
    overload_threshold: float = 0

    def to_dict(self):
        return {
            'load_by_assignee': {
                assignee_id: load.to_dict() for assignee_id, load in self.load_by_assignee.items()
            },
            'overloaded_assignees': list(self.overloaded_assignees),
            'overload_threshold': self.overload_threshold,
        }


@dataclass
class ScheduleReport:
    """Composite report of one schedule."""
    schedule_id: str
    tasks: List[Task]
    metrics: GanttMetrics
    timeline: Timeline
    critical_path: CriticalPath
    workload: Workload

    def to_dict(self):
        return {
            'schedule_id': self.schedule_id,
            'tasks': [task.to_dict() for task in self.tasks],
            'metrics': self.metrics.to_dict(),
            'timeline': self.timeline.to_dict(),
            'critical_path': self.critical_path.to_dict(),
            'workload': self.workload.to_dict(),
        }
