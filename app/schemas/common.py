from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.utils.dates import as_utc

# Incoming datetimes are normalized to aware UTC; naive ones are taken as UTC
UTCDatetime = Annotated[datetime, AfterValidator(as_utc)]


class CamelModel(BaseModel):
    """
    Python attributes stay snake_case; JSON uses camelCase (clientId, dueDate, ...).
    Enum-typed fields hold their plain string value.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


class InputModel(CamelModel):
    model_config = ConfigDict(extra="forbid")


def reject_null(value):
    if value is None:
        raise ValueError("may not be null")
    return value
