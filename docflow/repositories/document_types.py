from sqlalchemy.orm import Session
from docflow.errors import NotFound
from docflow.models.document_type import DocumentType


class DocumentTypeRepository:
    def __init__(self, db: Session):
        self.db = db

    def _query(self, active: bool | None = None):
        q = self.db.query(DocumentType)
        if active is not None:
            q = q.filter(DocumentType.is_active == active)
        return q

    def get(self, type_id: int) -> DocumentType:
        doc_type = self.db.get(DocumentType, type_id)
        if doc_type is None:
            raise NotFound(f"Document type {type_id} not found")
        return doc_type

    def find_by_ids(self, ids) -> dict[int, DocumentType]:
        ids = set(ids)
        if not ids:
            return {}
        rows = self.db.query(DocumentType).filter(DocumentType.id.in_(ids)).all()
        return {t.id: t for t in rows}

    def list(self, active: bool | None = None) -> list[DocumentType]:
        return self._query(active).order_by(DocumentType.name.asc(), DocumentType.id.asc()).all()

    def count(self, active: bool | None = None) -> int:
        return self._query(active).count()

    def create(self, doc_type: DocumentType) -> DocumentType:
        self.db.add(doc_type)
        self.db.commit()
        self.db.refresh(doc_type)
        return doc_type

    def update(self, doc_type: DocumentType, **fields) -> DocumentType:
        for key, value in fields.items():
            setattr(doc_type, key, value)
        self.db.commit()
        self.db.refresh(doc_type)
        return doc_type

    def delete(self, doc_type: DocumentType) -> None:
        self.db.delete(doc_type)
        self.db.commit()
