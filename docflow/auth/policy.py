"""Role policy: which roles may perform which action.

The caller's role always comes from the stored user record resolved from the
token, never from request input.
"""
import enum
import logging
from docflow.errors import Forbidden
from docflow.models.user import Role

logger = logging.getLogger(__name__)


class Action(str, enum.Enum):
    CREATE_DOCUMENT_TYPE = "create_document_type"
    UPDATE_DOCUMENT_TYPE = "update_document_type"
    DELETE_DOCUMENT_TYPE = "delete_document_type"
    UPLOAD_DOCUMENT = "upload_document"
    LIST_DOCUMENTS = "list_documents"
    APPROVE_DOCUMENT = "approve_document"
    UPDATE_DOCUMENT = "update_document"
    DELETE_DOCUMENT = "delete_document"
    MANAGE_USERS = "manage_users"


POLICY: dict[Action, frozenset[Role]] = {
    Action.CREATE_DOCUMENT_TYPE: frozenset({Role.ADMIN, Role.DOCUMENT_CREATOR}),
    Action.UPDATE_DOCUMENT_TYPE: frozenset({Role.ADMIN, Role.DOCUMENT_CREATOR}),
    Action.DELETE_DOCUMENT_TYPE: frozenset({Role.ADMIN}),
    Action.UPLOAD_DOCUMENT: frozenset({Role.ADMIN, Role.DOCUMENT_UPLOADER}),
    Action.LIST_DOCUMENTS: frozenset({Role.ADMIN, Role.DOCUMENT_UPLOADER, Role.DOCUMENT_APPROVER}),
    Action.APPROVE_DOCUMENT: frozenset({Role.ADMIN, Role.DOCUMENT_APPROVER}),
    # uploaders may only touch their own pending documents, checked by the service
    Action.UPDATE_DOCUMENT: frozenset({Role.ADMIN, Role.DOCUMENT_UPLOADER}),
    Action.DELETE_DOCUMENT: frozenset({Role.ADMIN}),
    Action.MANAGE_USERS: frozenset({Role.ADMIN}),
}

MESSAGES = {
    Action.CREATE_DOCUMENT_TYPE: "You do not have permission to create document types",
    Action.UPDATE_DOCUMENT_TYPE: "You do not have permission to update document types",
    Action.DELETE_DOCUMENT_TYPE: "Only admins can delete document types",
    Action.UPLOAD_DOCUMENT: "You do not have permission to upload documents",
    Action.LIST_DOCUMENTS: "You do not have permission to view documents",
    Action.APPROVE_DOCUMENT: "You do not have permission to approve documents",
    Action.UPDATE_DOCUMENT: "You do not have permission to update documents",
    Action.DELETE_DOCUMENT: "Only admins can delete documents",
    Action.MANAGE_USERS: "Only admins can manage users",
}


def is_allowed(role: Role | str, action: Action) -> bool:
    try:
        role = Role(role)
    except ValueError:
        return False
    return role in POLICY[action]


def require(role: Role | str, action: Action) -> None:
    if not is_allowed(role, action):
        logger.warning("Forbidden: role=%s action=%s", getattr(role, "value", role), action.value)
        raise Forbidden(MESSAGES[action])
