# launchboard/db/models/enums.py
import enum
from typing import Optional


class TaskStatus(str, enum.Enum):
    """Board columns, in display order"""
    BACKLOG = "backlog"
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    DONE = "done"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

    @classmethod
    def parse(cls, value) -> Optional["TaskStatus"]:
        """Return the member for a raw value, or None when unrecognised"""
        try:
            return cls(value)
        except ValueError:
            return None


STATUS_LABELS = {
    TaskStatus.BACKLOG: "Backlog",
    TaskStatus.TODO: "To Do",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.REVIEW: "Review",
    TaskStatus.DONE: "Done",
}

COLUMN_ORDER = tuple(TaskStatus)


class TaskPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def label(self) -> str:
        return self.value.title()


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class ActivityAction(str, enum.Enum):
    """Task activity log actions"""
    CREATED = "created"
    UPDATED = "updated"
    STATUS_CHANGE = "status_change"
    ADDED_COMMENT = "added_comment"
