
import logging
from docflow.auth.policy import Action, require
from docflow.errors import Conflict
from docflow.models.document_type import DocumentType
from docflow.repositories.document_types import DocumentTypeRepository
from docflow.repositories.documents import DocumentRepository
from docflow.utils.security import Identity

logger = logging.getLogger(__name__)


class DocumentTypeService:
    def __init__(self, document_types: DocumentTypeRepository, documents: DocumentRepository):
        self.document_types = document_types
        self.documents = documents

    def create(self, caller: Identity, name: str, description: str | None, is_active: bool = True) -> DocumentType:
        require(caller.role, Action.CREATE_DOCUMENT_TYPE)
        doc_type = self.document_types.create(
            DocumentType(name=name, description=description, is_active=is_active, created_by=caller.id)
        )
        logger.info("Document type %s created by user %s", doc_type.id, caller.id)
        return doc_type

    def list(self, active: bool | None = None) -> list[DocumentType]:
        return self.document_types.list(active)

    def count(self, active: bool | None = None) -> int:
        return self.document_types.count(active)

    def get(self, type_id: int) -> DocumentType:
        return self.document_types.get(type_id)

    def update(self, caller: Identity, type_id: int, fields: dict) -> DocumentType:
        require(caller.role, Action.UPDATE_DOCUMENT_TYPE)
        doc_type = self.document_types.get(type_id)
        allowed = {k: v for k, v in fields.items() if k in ("name", "description", "is_active")}
        # description is the only nullable column
        allowed = {k: v for k, v in allowed.items() if v is not None or k == "description"}
        return self.document_types.update(doc_type, **allowed)

    def delete(self, caller: Identity, type_id: int) -> None:
        require(caller.role, Action.DELETE_DOCUMENT_TYPE)
        doc_type = self.document_types.get(type_id)
        if self.documents.exists_for_type(type_id):
            raise Conflict("Document type is still referenced by documents")
        self.document_types.delete(doc_type)
        logger.info("Document type %s deleted by user %s", type_id, caller.id)
