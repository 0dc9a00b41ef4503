# launchboard/db/models/task.py
"""Kanban task, comment and activity tables"""
from sqlalchemy import Column, Integer, String, Text, Float, Date, JSON, ForeignKey, Index

from launchboard.db.models.base import Base, TimestampMixin, CreatedAtMixin, StringIDMixin
from launchboard.db.models.enums import TaskStatus, TaskPriority


class Task(Base, StringIDMixin, TimestampMixin):
    """One card on the launch board"""
    __tablename__ = "tasks"

    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    # Stored as plain text; values are validated when rows enter the board
    status = Column(String(20), nullable=False, default=TaskStatus.BACKLOG.value, index=True)
    priority = Column(String(20), nullable=False, default=TaskPriority.MEDIUM.value)
    category = Column(String(255), nullable=True)
    phase = Column(String(255), nullable=True)
    link = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    tags = Column(JSON, nullable=True)
    position = Column(Integer, nullable=False, default=0)
    estimated_hours = Column(Float, nullable=True)
    actual_hours = Column(Float, nullable=True)
    due_date = Column(Date, nullable=True)

    created_by = Column(String(36), nullable=True)
    assigned_to = Column(String(36), nullable=True)

    __table_args__ = (
        Index('idx_task_status_position', 'status', 'position'),
    )

    def __repr__(self):
        return f"<Task title={self.title} status={self.status} position={self.position}>"


class TaskComment(Base, StringIDMixin, CreatedAtMixin):
    """Immutable comment on a task"""
    __tablename__ = "task_comments"

    task_id = Column(String(36), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), nullable=True)
    content = Column(Text, nullable=False)

    def __repr__(self):
        return f"<TaskComment task_id={self.task_id}>"


class TaskActivity(Base, StringIDMixin, CreatedAtMixin):
    """Append-only audit entry for a task"""
    __tablename__ = "task_activity"

    task_id = Column(String(36), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(36), nullable=True)
    action = Column(String(50), nullable=False)
    old_value = Column(Text, nullable=True)
    new_value = Column(Text, nullable=True)
    field_name = Column(String(100), nullable=True)

    __table_args__ = (
        Index('idx_task_activity_task_created', 'task_id', 'created_at'),
    )

    def __repr__(self):
        return f"<TaskActivity task_id={self.task_id} action={self.action}>"
