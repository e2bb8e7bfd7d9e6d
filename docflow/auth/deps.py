
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from docflow.auth.service import AuthService
from docflow.config import settings
from docflow.db.session import SessionLocal
from docflow.document_types.service import DocumentTypeService
from docflow.documents.service import DocumentService
from docflow.errors import Unauthorized
from docflow.repositories.document_types import DocumentTypeRepository
from docflow.repositories.documents import DocumentRepository
from docflow.repositories.users import CredentialsRepository, UserRepository
from docflow.uploads.storage import FileStorage
from docflow.utils.security import Identity, TokenService

bearer_scheme = HTTPBearer(auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_token_service() -> TokenService:
    return TokenService(settings.secret_key, settings.access_token_expire_seconds)

def get_storage() -> FileStorage:
    return FileStorage(settings.upload_dir, settings.max_upload_mb * 1024 * 1024)

def get_auth_service(
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(UserRepository(db), CredentialsRepository(db), tokens)

def get_document_type_service(db: Session = Depends(get_db)) -> DocumentTypeService:
    return DocumentTypeService(DocumentTypeRepository(db), DocumentRepository(db))

def get_document_service(
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_storage),
) -> DocumentService:
    return DocumentService(DocumentRepository(db), DocumentTypeRepository(db), UserRepository(db), storage)

def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> Identity:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthorized("Not authenticated")
    identity, _ = auth.authenticate(credentials.credentials)
    return identity
