
from datetime import datetime
from pydantic import Field
from docflow.schemas.common import CamelModel

class DocumentTypeCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = None
    is_active: bool = True

class DocumentTypeUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    is_active: bool | None = None

class DocumentTypeOut(CamelModel):
    id: int
    name: str
    description: str | None = None
    is_active: bool
    created_by: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
