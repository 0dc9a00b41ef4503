# launchboard/db/models/__init__.py
"""
Database models package
Imports all models for easy access
"""

# Import base classes and mixins
from launchboard.db.models.base import Base, TimestampMixin, CreatedAtMixin, StringIDMixin

# Import all enums
from launchboard.db.models.enums import (
    TaskStatus, TaskPriority, UserRole, ActivityAction, STATUS_LABELS, COLUMN_ORDER
)

# Import board models
from launchboard.db.models.task import Task, TaskComment, TaskActivity
from launchboard.db.models.taxonomy import Phase, Category
from launchboard.db.models.profile import Profile

# Export all models and enums
__all__ = [
    # Base classes
    'Base', 'TimestampMixin', 'CreatedAtMixin', 'StringIDMixin',

    # Enums
    'TaskStatus', 'TaskPriority', 'UserRole', 'ActivityAction', 'STATUS_LABELS', 'COLUMN_ORDER',

    # Board models
    'Task', 'TaskComment', 'TaskActivity', 'Phase', 'Category', 'Profile',
]
