from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.schemas.common import CamelModel, InputModel, reject_null, UTCDatetime


class CrmIntegrationCreate(InputModel):
    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)  # salesforce, hubspot, pipedrive, zoho
    api_key: Optional[str] = None
    is_connected: bool = False
    last_sync: Optional[UTCDatetime] = None


class CrmIntegrationUpdate(InputModel):
    name: Optional[str] = Field(None, min_length=1)
    type: Optional[str] = Field(None, min_length=1)
    api_key: Optional[str] = None
    is_connected: Optional[bool] = None
    last_sync: Optional[UTCDatetime] = None

    @field_validator("name", "type", "is_connected")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class CrmIntegrationOut(CamelModel):
    id: int
    name: str
    type: str
    api_key: Optional[str] = None
    is_connected: bool
    last_sync: Optional[datetime] = None
    created_at: datetime
