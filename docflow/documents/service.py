"""Document operations: upload, visibility-filtered reads, approval, admin delete."""
import logging
from dataclasses import dataclass
from fastapi import UploadFile
from docflow.auth.policy import Action, require
from docflow.documents.lifecycle import apply_decision
from docflow.errors import BadRequest, Forbidden, NotFound
from docflow.models.document import Document, DocumentStatus
from docflow.models.document_type import DocumentType
from docflow.models.user import Role, User
from docflow.repositories.document_types import DocumentTypeRepository
from docflow.repositories.documents import DocumentFilter, DocumentRepository
from docflow.repositories.users import UserRepository
from docflow.uploads.storage import FileStorage
from docflow.utils.security import Identity

logger = logging.getLogger(__name__)


@dataclass
class DocumentView:
    document: Document
    uploader: User | None = None
    document_type: DocumentType | None = None


def visible_filter(role: Role | str, caller_id: int, flt: DocumentFilter) -> DocumentFilter:
    """Uploaders only ever see their own documents, whatever filter they send."""
    if Role(role) is Role.DOCUMENT_UPLOADER:
        return flt.restricted_to(caller_id)
    return flt


class DocumentService:
    def __init__(
        self,
        documents: DocumentRepository,
        document_types: DocumentTypeRepository,
        users: UserRepository,
        storage: FileStorage,
    ):
        self.documents = documents
        self.document_types = document_types
        self.users = users
        self.storage = storage

    def upload(
        self,
        caller: Identity,
        file: UploadFile | None,
        title: str | None,
        document_type_id: int | None,
        remarks: str | None = None,
    ) -> Document:
        require(caller.role, Action.UPLOAD_DOCUMENT)
        if file is None or not file.filename:
            raise BadRequest("No file uploaded")
        if not (title or "").strip():
            raise BadRequest("Title is required")
        if document_type_id is None:
            raise BadRequest("documentTypeId is required")

        doc_type = self.document_types.get(document_type_id)
        if not doc_type.is_active:
            raise BadRequest(f"Document type {doc_type.id} is not active")

        stored = self.storage.save(file)
        try:
            doc = self.documents.create(Document(
                title=title.strip(),
                file_name=stored.file_name,
                file_path=stored.path,
                mime_type=stored.mime_type,
                file_size=stored.size,
                document_type_id=doc_type.id,
                uploaded_by=caller.id,
                status=DocumentStatus.PENDING,
                remarks=remarks,
            ))
        except Exception:
            self.documents.db.rollback()
            logger.warning("Document row not created, orphaned upload left at %s", stored.path)
            raise
        logger.info("Document %s uploaded by user %s", doc.id, caller.id)
        return doc

    def _attach(self, docs: list[Document]) -> list[DocumentView]:
        uploaders = self.users.find_by_ids(d.uploaded_by for d in docs)
        types = self.document_types.find_by_ids(d.document_type_id for d in docs)
        return [DocumentView(d, uploaders.get(d.uploaded_by), types.get(d.document_type_id)) for d in docs]

    def list(self, caller: Identity, flt: DocumentFilter) -> list[DocumentView]:
        require(caller.role, Action.LIST_DOCUMENTS)
        docs = self.documents.list(visible_filter(caller.role, caller.id, flt))
        return self._attach(docs)

    def count(self, caller: Identity, flt: DocumentFilter) -> int:
        require(caller.role, Action.LIST_DOCUMENTS)
        return self.documents.count(visible_filter(caller.role, caller.id, flt))

    def _visible(self, caller: Identity, doc_id: int) -> Document:
        doc = self.documents.get(doc_id)
        if Role(caller.role) is Role.DOCUMENT_UPLOADER and doc.uploaded_by != caller.id:
            raise NotFound(f"Document {doc_id} not found")
        return doc

    def get(self, caller: Identity, doc_id: int) -> DocumentView:
        require(caller.role, Action.LIST_DOCUMENTS)
        return self._attach([self._visible(caller, doc_id)])[0]

    def approve(self, caller: Identity, doc_id: int, decision: str, remarks: str | None) -> Document:
        require(caller.role, Action.APPROVE_DOCUMENT)
        doc = self.documents.get(doc_id)
        apply_decision(doc, decision, remarks, approver_id=caller.id)
        # no version check: two approvers racing on the same row is last-write-wins
        doc = self.documents.save(doc)
        logger.info("Document %s %s by user %s", doc.id, doc.status.value, caller.id)
        return doc

    def update(self, caller: Identity, doc_id: int, fields: dict) -> Document:
        require(caller.role, Action.UPDATE_DOCUMENT)
        doc = self._visible(caller, doc_id)
        if Role(caller.role) is not Role.ADMIN and doc.status is not DocumentStatus.PENDING:
            raise Forbidden("Only pending documents can be edited")
        allowed = {k: v for k, v in fields.items() if k in ("title", "remarks", "document_type_id")}
        allowed = {k: v for k, v in allowed.items() if v is not None or k == "remarks"}
        if "document_type_id" in allowed:
            doc_type = self.document_types.get(allowed["document_type_id"])
            if not doc_type.is_active:
                raise BadRequest(f"Document type {doc_type.id} is not active")
        for key, value in allowed.items():
            setattr(doc, key, value)
        return self.documents.save(doc)

    def delete(self, caller: Identity, doc_id: int) -> None:
        require(caller.role, Action.DELETE_DOCUMENT)
        doc = self.documents.get(doc_id)
        file_path = doc.file_path
        self.documents.delete(doc)
        logger.info("Document %s deleted by user %s (file kept at %s)", doc_id, caller.id, file_path)
