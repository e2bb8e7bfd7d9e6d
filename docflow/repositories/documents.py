from dataclasses import dataclass, replace
from sqlalchemy.orm import Session
from docflow.errors import NotFound
from docflow.models.document import Document, DocumentStatus


@dataclass(frozen=True)
class DocumentFilter:
    status: DocumentStatus | None = None
    document_type_id: int | None = None
    uploaded_by: int | None = None
    limit: int | None = None
    offset: int = 0

    def restricted_to(self, uploader_id: int) -> "DocumentFilter":
        return replace(self, uploaded_by=uploader_id)


class DocumentRepository:
    def __init__(self, db: Session):
        self.db = db

    def _query(self, flt: DocumentFilter):
        q = self.db.query(Document)
        if flt.status is not None:
            q = q.filter(Document.status == flt.status)
        if flt.document_type_id is not None:
            q = q.filter(Document.document_type_id == flt.document_type_id)
        if flt.uploaded_by is not None:
            q = q.filter(Document.uploaded_by == flt.uploaded_by)
        return q

    def get(self, doc_id: int) -> Document:
        doc = self.db.get(Document, doc_id)
        if doc is None:
            raise NotFound(f"Document {doc_id} not found")
        return doc

    def list(self, flt: DocumentFilter) -> list[Document]:
        q = self._query(flt).order_by(Document.created_at.desc(), Document.id.desc())
        if flt.offset:
            q = q.offset(flt.offset)
        if flt.limit is not None:
            q = q.limit(flt.limit)
        return q.all()

    def count(self, flt: DocumentFilter) -> int:
        return self._query(flt).count()

    def exists_for_type(self, type_id: int) -> bool:
        return self.db.query(Document.id).filter(Document.document_type_id == type_id).first() is not None

    def create(self, doc: Document) -> Document:
        self.db.add(doc)
        self.db.commit()
        self.db.refresh(doc)
        return doc

    def save(self, doc: Document) -> Document:
        self.db.commit()
        self.db.refresh(doc)
        return doc

    def delete(self, doc: Document) -> None:
        self.db.delete(doc)
        self.db.commit()
