import enum
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.schemas.common import CamelModel, InputModel, reject_null, UTCDatetime


class TaskStatus(str, enum.Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"


class TaskPriority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


class TaskCreate(InputModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    client_id: Optional[int] = None
    status: TaskStatus = TaskStatus.pending
    priority: TaskPriority = TaskPriority.medium
    due_date: Optional[UTCDatetime] = None


class TaskUpdate(InputModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    client_id: Optional[int] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[UTCDatetime] = None

    @field_validator("title", "status", "priority")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class TaskOut(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    client_id: Optional[int] = None
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class TaskView(TaskOut):
    """A task as the API shows it, with its derived state."""

    is_overdue: bool
    client_name: str
