from fastapi import Request
from fastapi.responses import JSONResponse

PUBLIC_PATHS = ["/users/signup", "/users/login", "/docs", "/redoc", "/openapi.json"]

def _get_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization")
    if auth and auth.lower().startswith("bearer "):
        return auth.split(" ", 1)[1].strip() or None
    return None

def is_public(path: str) -> bool:
    return path == "/" or any(path == p or path.startswith(p + "/") for p in PUBLIC_PATHS)

async def auth_middleware(request: Request, call_next):
    # token verification proper happens in get_current_identity
    if request.method == "OPTIONS" or is_public(request.url.path):
        return await call_next(request)

    if not _get_token(request):
        return JSONResponse(
            status_code=401,
            content={"detail": "Not authenticated", "error": "Unauthorized"},
            headers={"WWW-Authenticate": "Bearer"},
        )

    return await call_next(request)
