
from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile
from docflow.auth.deps import get_current_identity, get_document_service
from docflow.documents.service import DocumentService
from docflow.models.document import DocumentStatus
from docflow.repositories.documents import DocumentFilter
from docflow.schemas.common import CountOut
from docflow.schemas.document import ApprovalIn, DocumentOut, DocumentUpdate, document_out
from docflow.utils.security import Identity


def document_filter(
    status: DocumentStatus | None = Query(None),
    document_type_id: int | None = Query(None, alias="documentTypeId"),
    uploaded_by: int | None = Query(None, alias="uploadedBy"),
    limit: int | None = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> DocumentFilter:
    return DocumentFilter(
        status=status,
        document_type_id=document_type_id,
        uploaded_by=uploaded_by,
        limit=limit,
        offset=offset,
    )

def upload_document(
    file: UploadFile | None = File(None),
    title: str | None = Form(None),
    document_type_id: int | None = Form(None, alias="documentTypeId"),
    remarks: str | None = Form(None),
    identity: Identity = Depends(get_current_identity),
    service: DocumentService = Depends(get_document_service),
):
    doc = service.upload(identity, file, title, document_type_id, remarks)
    return document_out(doc)

def list_documents(
    flt: DocumentFilter = Depends(document_filter),
    identity: Identity = Depends(get_current_identity),
    service: DocumentService = Depends(get_document_service),
):
    return [document_out(v.document, v.uploader, v.document_type) for v in service.list(identity, flt)]

def count_documents(
    flt: DocumentFilter = Depends(document_filter),
    identity: Identity = Depends(get_current_identity),
    service: DocumentService = Depends(get_document_service),
):
    return CountOut(count=service.count(identity, flt))

def get_document(
    doc_id: int,
    identity: Identity = Depends(get_current_identity),
    service: DocumentService = Depends(get_document_service),
):
    view = service.get(identity, doc_id)
    return document_out(view.document, view.uploader, view.document_type)

def approve_document(
    doc_id: int,
    body: ApprovalIn,
    identity: Identity = Depends(get_current_identity),
    service: DocumentService = Depends(get_document_service),
):
    service.approve(identity, doc_id, body.status, body.remarks)
    return Response(status_code=204)

def update_document(
    doc_id: int,
    body: DocumentUpdate,
    identity: Identity = Depends(get_current_identity),
    service: DocumentService = Depends(get_document_service),
):
    service.update(identity, doc_id, body.model_dump(exclude_unset=True))
    return Response(status_code=204)

def delete_document(
    doc_id: int,
    identity: Identity = Depends(get_current_identity),
    service: DocumentService = Depends(get_document_service),
):
    service.delete(identity, doc_id)
    return Response(status_code=204)


ROUTES = [
    ("POST", "/upload", upload_document, {"response_model": DocumentOut}),
    ("GET", "", list_documents, {"response_model": list[DocumentOut]}),
    ("GET", "/count", count_documents, {"response_model": CountOut}),
    ("GET", "/{doc_id}", get_document, {"response_model": DocumentOut}),
    ("PATCH", "/{doc_id}/approve", approve_document, {"status_code": 204, "response_class": Response}),
    ("PATCH", "/{doc_id}", update_document, {"status_code": 204, "response_class": Response}),
    ("DELETE", "/{doc_id}", delete_document, {"status_code": 204, "response_class": Response}),
]

router = APIRouter(prefix="/documents", tags=["documents"])
for method, path, endpoint, options in ROUTES:
    router.add_api_route(path, endpoint, methods=[method], **options)
