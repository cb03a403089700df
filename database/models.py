from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship
from datetime import datetime

Base = declarative_base()


class Schedule(Base):
    """Project schedule."""
    __tablename__ = 'schedules'

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.now)

    tasks = relationship("Task", back_populates="schedule", order_by="Task.id")

    def __repr__(self):
        return f"<Schedule(id={self.id}, name='{self.name}')>"


class Assignee(Base):
    """Person tasks are assigned to."""
    __tablename__ = 'assignees'

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)

    tasks = relationship("Task", back_populates="assignee")

    def __repr__(self):
        return f"<Assignee(id={self.id}, name='{self.name}')>"


class Task(Base):
    """Schedule task."""
    __tablename__ = 'tasks'

    id = Column(Integer, primary_key=True)
    schedule_id = Column(Integer, ForeignKey('schedules.id'), nullable=False)
    assignee_id = Column(Integer, ForeignKey('assignees.id'), nullable=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    state = Column(String, nullable=False, default='pendiente')
    priority = Column(String, nullable=False, default='medium')
    progress = Column(Integer, nullable=False, default=0)
    estimated_hours = Column(Float, nullable=False, default=0)
    actual_hours = Column(Float, nullable=True)
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    actual_start_date = Column(DateTime, nullable=True)
    actual_end_date = Column(DateTime, nullable=True)

    schedule = relationship("Schedule", back_populates="tasks")
    assignee = relationship("Assignee", back_populates="tasks")
    predecessors = relationship(
        "TaskDependency",
        foreign_keys="[TaskDependency.task_id]",
        back_populates="task",
        order_by="TaskDependency.id"
    )

    def __repr__(self):
        return f"<Task(id={self.id}, name='{self.name}', estimated_hours={self.estimated_hours})>"


class TaskDependency(Base):
    """Dependency between tasks: task starts after predecessor finishes."""
    __tablename__ = 'task_dependencies'
    __table_args__ = (UniqueConstraint('task_id', 'predecessor_id'),)

    id = Column(Integer, primary_key=True)
    task_id = Column(Integer, ForeignKey('tasks.id'), nullable=False)
    predecessor_id = Column(Integer, ForeignKey('tasks.id'), nullable=False)

    task = relationship("Task", foreign_keys=[task_id], back_populates="predecessors")
    predecessor = relationship("Task", foreign_keys=[predecessor_id])

    def __repr__(self):
        return f"<TaskDependency(task_id={self.task_id}, predecessor_id={self.predecessor_id})>"
