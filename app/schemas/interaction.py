from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.common import CamelModel, InputModel, UTCDatetime


class InteractionCreate(InputModel):
    client_id: int
    type: str = Field(..., min_length=1)  # call, email, meeting, note
    content: str = Field(..., min_length=1)
    date: Optional[UTCDatetime] = None  # defaults to the time of creation


class InteractionOut(CamelModel):
    id: int
    client_id: int
    type: str
    content: str
    date: datetime
    created_at: datetime
