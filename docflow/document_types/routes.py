
from fastapi import APIRouter, Depends, Query, Response
from docflow.auth.deps import get_current_identity, get_document_type_service
from docflow.document_types.service import DocumentTypeService
from docflow.schemas.common import CountOut
from docflow.schemas.document_type import DocumentTypeCreate, DocumentTypeUpdate, DocumentTypeOut
from docflow.utils.security import Identity


def create_document_type(
    body: DocumentTypeCreate,
    identity: Identity = Depends(get_current_identity),
    service: DocumentTypeService = Depends(get_document_type_service),
):
    return service.create(identity, body.name, body.description, body.is_active)

def list_document_types(
    active: bool | None = Query(None),
    identity: Identity = Depends(get_current_identity),
    service: DocumentTypeService = Depends(get_document_type_service),
):
    return service.list(active)

def count_document_types(
    active: bool | None = Query(None),
    identity: Identity = Depends(get_current_identity),
    service: DocumentTypeService = Depends(get_document_type_service),
):
    return CountOut(count=service.count(active))

def get_document_type(
    type_id: int,
    identity: Identity = Depends(get_current_identity),
    service: DocumentTypeService = Depends(get_document_type_service),
):
    return service.get(type_id)

def update_document_type(
    type_id: int,
    body: DocumentTypeUpdate,
    identity: Identity = Depends(get_current_identity),
    service: DocumentTypeService = Depends(get_document_type_service),
):
    service.update(identity, type_id, body.model_dump(exclude_unset=True))
    return Response(status_code=204)

def delete_document_type(
    type_id: int,
    identity: Identity = Depends(get_current_identity),
    service: DocumentTypeService = Depends(get_document_type_service),
):
    service.delete(identity, type_id)
    return Response(status_code=204)


ROUTES = [
    ("POST", "", create_document_type, {"response_model": DocumentTypeOut}),
    ("GET", "", list_document_types, {"response_model": list[DocumentTypeOut]}),
    ("GET", "/count", count_document_types, {"response_model": CountOut}),
    ("GET", "/{type_id}", get_document_type, {"response_model": DocumentTypeOut}),
    ("PATCH", "/{type_id}", update_document_type, {"status_code": 204, "response_class": Response}),
    ("DELETE", "/{type_id}", delete_document_type, {"status_code": 204, "response_class": Response}),
]

router = APIRouter(prefix="/document-types", tags=["document-types"])
for method, path, endpoint, options in ROUTES:
    router.add_api_route(path, endpoint, methods=[method], **options)
