import enum
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.schemas.common import CamelModel, InputModel, reject_null, UTCDatetime


class FollowUpType(str, enum.Enum):
    call = "call"
    email = "email"
    meeting = "meeting"
    reminder = "reminder"


class FollowUpStatus(str, enum.Enum):
    scheduled = "scheduled"
    completed = "completed"
    cancelled = "cancelled"


class FollowUpCreate(InputModel):
    client_id: int
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    scheduled_date: UTCDatetime
    type: FollowUpType = FollowUpType.call
    status: FollowUpStatus = FollowUpStatus.scheduled


class FollowUpUpdate(InputModel):
    client_id: Optional[int] = None
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    scheduled_date: Optional[UTCDatetime] = None
    type: Optional[FollowUpType] = None
    status: Optional[FollowUpStatus] = None

    @field_validator("client_id", "title", "scheduled_date", "type", "status")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class FollowUpOut(CamelModel):
    id: int
    client_id: int
    title: str
    description: Optional[str] = None
    scheduled_date: datetime
    type: FollowUpType
    status: FollowUpStatus
    created_at: datetime
    updated_at: datetime


class FollowUpView(FollowUpOut):
    is_overdue: bool
    client_name: str
