import enum
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.schemas.common import CamelModel, InputModel, reject_null


class ClientStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"
    lead = "lead"


class ClientCreate(InputModel):
    name: str = Field(..., min_length=1)
    company: Optional[str] = None
    email: EmailStr
    phone: Optional[str] = None
    status: ClientStatus = ClientStatus.active


class ClientUpdate(InputModel):
    name: Optional[str] = Field(None, min_length=1)
    company: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    status: Optional[ClientStatus] = None

    @field_validator("name", "email", "status")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class ClientOut(CamelModel):
    id: int
    name: str
    company: Optional[str] = None
    email: str
    phone: Optional[str] = None
    status: ClientStatus
    created_at: datetime
    updated_at: datetime
