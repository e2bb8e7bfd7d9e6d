
from datetime import datetime
from pydantic import EmailStr, Field
from docflow.models.user import Role
from docflow.schemas.common import CamelModel

class SignUpIn(CamelModel):
    email: EmailStr
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=6, max_length=256)
    role: Role

class LoginIn(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)

class UserOut(CamelModel):
    id: int
    email: str
    username: str
    role: Role
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

class UserUpdate(CamelModel):
    is_active: bool | None = None
    role: Role | None = None

class LoginOut(CamelModel):
    token: str
    user: UserOut
