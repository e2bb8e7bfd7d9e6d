
from datetime import datetime
from typing import Literal
from pydantic import Field
from docflow.models.document import DocumentStatus
from docflow.schemas.common import CamelModel
from docflow.schemas.auth import UserOut
from docflow.schemas.document_type import DocumentTypeOut

class ApprovalIn(CamelModel):
    status: Literal["approved", "rejected"]
    remarks: str | None = None

class DocumentUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    remarks: str | None = None
    document_type_id: int | None = None

class DocumentOut(CamelModel):
    id: int
    title: str
    file_name: str
    file_path: str
    mime_type: str | None = None
    file_size: int | None = None
    document_type_id: int
    uploaded_by: int
    status: DocumentStatus
    approved_by: int | None = None
    approved_at: datetime | None = None
    remarks: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    uploader: UserOut | None = None
    document_type: DocumentTypeOut | None = None

def document_out(doc, uploader=None, document_type=None) -> DocumentOut:
    return DocumentOut.model_validate(doc).model_copy(update={
        "uploader": UserOut.model_validate(uploader) if uploader is not None else None,
        "document_type": DocumentTypeOut.model_validate(document_type) if document_type is not None else None,
    })
