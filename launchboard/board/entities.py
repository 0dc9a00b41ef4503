# launchboard/board/entities.py
"""Validated in-memory form of a board task"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from launchboard.db.models.enums import TaskStatus, TaskPriority


class BoardTask(BaseModel):
    """
    A task row as the board sees it.

    Rows from the gateway are parsed into this model before they reach the
    reducer, so status and priority are always known members here.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.BACKLOG
    priority: TaskPriority = TaskPriority.MEDIUM
    category: Optional[str] = None
    phase: Optional[str] = None
    link: Optional[str] = None
    notes: Optional[str] = None
    tags: Optional[List[str]] = None
    position: int = Field(0, ge=0)
    estimated_hours: Optional[float] = Field(None, ge=0)
    actual_hours: Optional[float] = Field(None, ge=0)
    due_date: Optional[date] = None
    created_by: Optional[str] = None
    assigned_to: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def placement(self) -> tuple:
        """(status, position) pair that a drag may change"""
        return self.status, self.position
