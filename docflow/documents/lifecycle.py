"""
Approval lifecycle of a document.

    pending ──approve──> approved
        └────reject───> rejected

Both decided states are terminal. ``approved_by``/``approved_at`` are only
ever written here, together with the decision.
"""
from datetime import datetime, timezone
from docflow.errors import BadRequest, InvalidTransition
from docflow.models.document import Document, DocumentStatus

DECISIONS = frozenset({DocumentStatus.APPROVED, DocumentStatus.REJECTED})


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def apply_decision(
    doc: Document,
    decision: DocumentStatus | str,
    remarks: str | None,
    approver_id: int,
    now: datetime | None = None,
) -> Document:
    try:
        decision = DocumentStatus(decision)
    except ValueError:
        raise BadRequest(f"Unknown decision '{decision}'")
    if decision not in DECISIONS:
        raise BadRequest("Decision must be 'approved' or 'rejected'")
    if decision is DocumentStatus.REJECTED and not (remarks or "").strip():
        raise BadRequest("Remarks are required when rejecting a document")

    current = DocumentStatus(doc.status)
    if current is not DocumentStatus.PENDING:
        raise InvalidTransition(f"Document {doc.id} is already {current.value}")

    doc.status = decision
    doc.approved_by = approver_id
    doc.approved_at = now or utcnow()
    if remarks is not None:
        doc.remarks = remarks
    return doc
