# launchboard/api/v1/schemas/tasks.py
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from typing import Optional, List, Dict
from datetime import date, datetime

from launchboard.board.entities import BoardTask
from launchboard.db.models.enums import TaskStatus, TaskPriority


class TaskBase(BaseModel):
    """Editable task fields shared by create and response"""
    description: Optional[str] = Field(None, description="Task description")
    priority: TaskPriority = Field(TaskPriority.MEDIUM, description="Task priority")
    category: Optional[str] = None
    phase: Optional[str] = None
    link: Optional[str] = None
    notes: Optional[str] = None
    tags: Optional[List[str]] = None
    estimated_hours: Optional[float] = Field(None, ge=0)
    actual_hours: Optional[float] = Field(None, ge=0)
    due_date: Optional[date] = None
    assigned_to: Optional[str] = None


class TaskCreate(TaskBase):
    """Schema for creating a task"""
    title: str = Field(..., min_length=1, max_length=500, description="Task title")
    status: TaskStatus = Field(TaskStatus.BACKLOG, description="Initial column")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v


class TaskUpdate(BaseModel):
    """Schema for updating a task; omitted fields are left unchanged"""
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    category: Optional[str] = None
    phase: Optional[str] = None
    link: Optional[str] = None
    notes: Optional[str] = None
    tags: Optional[List[str]] = None
    estimated_hours: Optional[float] = Field(None, ge=0)
    actual_hours: Optional[float] = Field(None, ge=0)
    due_date: Optional[date] = None
    assigned_to: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            raise ValueError("Title cannot be removed")
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("status", "priority")
    @classmethod
    def not_null(cls, v, info: ValidationInfo):
        # Runs only when the field is sent; omitted fields keep their value
        if v is None:
            raise ValueError(f"{info.field_name.capitalize()} cannot be removed")
        return v


class TaskResponse(TaskBase):
    """Task as returned by the API"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    status: TaskStatus
    position: int
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_task(cls, task: BoardTask) -> "TaskResponse":
        return cls.model_validate(task.model_dump())


class BoardColumn(BaseModel):
    status: TaskStatus
    label: str
    tasks: List[TaskResponse]


class BoardResponse(BaseModel):
    """Grouped board view with the taxonomy used by the filter toolbar"""
    columns: List[BoardColumn]
    total: int = Field(..., description="Tasks on the board before filtering")
    filtered: bool = False
    phases: List[str] = []
    categories: List[str] = []


class TaskMoveRequest(BaseModel):
    """One drag gesture: start on active_id, optional hovers, drop on over_id"""
    active_id: str = Field(..., min_length=1)
    over_id: Optional[str] = Field(None, description="Drop target; null cancels the gesture")
    hover_ids: List[str] = Field(default_factory=list, description="Drag-over targets in order")


class MoveResponse(BaseModel):
    task_id: str
    cancelled: bool
    status_changed: bool
    old_status: Optional[TaskStatus] = None
    new_status: Optional[TaskStatus] = None
    changed_ids: List[str]
    failed_ids: List[str]
    activity_logged: bool
    rolled_back: bool
    columns: Dict[TaskStatus, List[TaskResponse]]


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, description="Comment text")

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Comment cannot be empty")
        return v


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    task_id: str
    user_id: Optional[str] = None
    content: str
    created_at: Optional[datetime] = None


class ActivityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    task_id: str
    user_id: Optional[str] = None
    action: str
    field_name: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    created_at: Optional[datetime] = None
