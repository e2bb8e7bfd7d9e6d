"""Error taxonomy shared by services and routes.

Each error is an ``HTTPException`` so FastAPI turns it into a JSON response
with the right status code; ``error_handler`` adds the error name.
"""
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse


class DocflowError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request"

    def __init__(self, detail: str | None = None, headers: dict[str, str] | None = None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail, headers=headers)


class BadRequest(DocflowError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request"


class Unauthorized(DocflowError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"

    def __init__(self, detail: str | None = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(DocflowError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class NotFound(DocflowError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Conflict(DocflowError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class InvalidTransition(Conflict):
    default_detail = "Invalid state transition"


class PayloadTooLarge(DocflowError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    default_detail = "Payload too large"


async def error_handler(request: Request, exc: DocflowError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": type(exc).__name__},
        headers=exc.headers,
    )
