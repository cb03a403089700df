import asyncio
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import selectinload, sessionmaker
from database.models import Base, Schedule, Task, TaskDependency, Assignee
from config import DATABASE_URL
from logger import logger
from planning import models as planning_models
from planning.exceptions import ScheduleNotFoundError

# Create the database connection
connect_args = {'check_same_thread': False} if DATABASE_URL.startswith('sqlite') else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args)
Session = sessionmaker(bind=engine)


@contextmanager
def session_scope():
    """
    Context manager for SQLAlchemy sessions.
    Commits on success and rolls back when an exception is raised.
    """
    session = Session()
    try:
        yield session
        session.commit()
    except Exception as e:
        session.rollback()
        logger.error(f"Database error: {str(e)}")
        raise
    finally:
        session.close()


def init_db():
    """Creates the database tables."""
    logger.info(f"Initializing database with URL: {DATABASE_URL}")
    try:
        Base.metadata.create_all(engine)
        logger.info("Database initialized")
    except Exception as e:
        logger.error(f"Error initializing database: {str(e)}")
        raise


def create_schedule(name):
    """
    Creates a new schedule.

    Args:
        name: Schedule name

    Returns:
        ID of the created schedule
    """
    with session_scope() as session:
        schedule = Schedule(name=name)
        session.add(schedule)
        session.flush()
        return schedule.id


def add_assignee(name, email=None):
    """
    Adds an assignee, reusing an existing one with the same name.

    Returns:
        ID of the assignee
    """
    with session_scope() as session:
        existing = session.query(Assignee).filter(Assignee.name == name).first()
        if existing:
            logger.info(f"Assignee '{name}' already exists with ID {existing.id}")
            return existing.id

        assignee = Assignee(name=name, email=email)
        session.add(assignee)
        session.flush()
        logger.info(f"Created assignee '{name}' with ID {assignee.id}")
        return assignee.id


def add_schedule_task(schedule_id, name, estimated_hours, **fields):
    """
    Adds a task to a schedule.

    Args:
        schedule_id: Schedule ID
        name: Task name
        estimated_hours: Planned effort in hours
        **fields: Other Task columns (priority, progress, start_date, assignee_id, ...)

    Returns:
        ID of the created task
    """
    priority = fields.pop('priority', planning_models.Priority.MEDIUM)
    with session_scope() as session:
        task = Task(
            schedule_id=schedule_id,
            name=name,
            estimated_hours=estimated_hours,
            priority=planning_models.Priority(priority).value,
            **fields
        )
        session.add(task)
        session.flush()
        return task.id


def add_task_dependency(task_id, predecessor_id):
    """
    Adds a dependency between tasks.

    Args:
        task_id: ID of the dependent task
        predecessor_id: ID of the prerequisite task

    Returns:
        ID of the created dependency
    """
    with session_scope() as session:
        dependency = TaskDependency(task_id=task_id, predecessor_id=predecessor_id)
        session.add(dependency)
        session.flush()
        return dependency.id


def get_schedule_tasks(schedule_id):
    """
    Reads the tasks of a schedule.

    Args:
        schedule_id: Schedule ID

    Returns:
        List of planning.models.Task

    Raises:
        ScheduleNotFoundError: if the schedule does not exist
    """
    with session_scope() as session:
        schedule = session.get(Schedule, schedule_id)
        if not schedule:
            logger.error(f"Schedule not found: {schedule_id}")
            raise ScheduleNotFoundError(schedule_id)

        rows = (
            session.query(Task)
            .options(selectinload(Task.assignee), selectinload(Task.predecessors))
            .filter(Task.schedule_id == schedule_id)
            .order_by(Task.id)
            .all()
        )
        logger.debug(f"Database tasks for schedule {schedule_id}: {len(rows)}")
        return [_to_planning_task(row) for row in rows]


def _to_planning_task(row):
    assignee = None
    if row.assignee:
        assignee = planning_models.Assignee(id=str(row.assignee.id), name=row.assignee.name)

    return planning_models.Task(
        id=str(row.id),
        name=row.name,
        state=row.state,
        priority=planning_models.Priority(row.priority),
        progress=row.progress,
        estimated_hours=row.estimated_hours,
        actual_hours=row.actual_hours,
        start_date=row.start_date,
        end_date=row.end_date,
        actual_start_date=row.actual_start_date,
        actual_end_date=row.actual_end_date,
        assignee=assignee,
        dependencies=tuple(str(dep.predecessor_id) for dep in row.predecessors),
        description=row.description
    )


class DatabaseTaskSource:
    """Task source reading schedules from the SQL database."""

    async def fetch_tasks(self, schedule_id):
        return await asyncio.to_thread(get_schedule_tasks, int(schedule_id))
