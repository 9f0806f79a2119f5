from pydantic import Field

from app.schemas.common import CamelModel, InputModel

DEFAULT_ROLE = "Project Manager"


class UserCreate(InputModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    name: str = "User"
    role: str = DEFAULT_ROLE


class UserOut(CamelModel):
    id: int
    username: str
    password: str  # bcrypt hash
    name: str
    role: str
