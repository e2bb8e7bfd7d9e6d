
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from docflow.middleware.ratelimit import RateLimitMiddleware, make_key_func
from docflow.middleware.auth import auth_middleware
from docflow.config import settings
from docflow.db.session import init_db
from docflow.errors import DocflowError, error_handler
from docflow.logging_config import setup_logging
from docflow.auth.deps import get_token_service
from docflow.auth.routes import router as users_router
from docflow.document_types.routes import router as document_types_router
from docflow.documents.routes import router as documents_router

logger = logging.getLogger(__name__)

def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name)

    app.add_middleware(
        RateLimitMiddleware,
        window_seconds=settings.rate_limit_window_seconds,
        max_calls=settings.rate_limit_max_calls,
        key_func=make_key_func(get_token_service()),
        include_path_prefixes=("/users/login", "/documents/upload"),
    )
    app.middleware("http")(auth_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DocflowError, error_handler)

    app.include_router(users_router)
    app.include_router(document_types_router)
    app.include_router(documents_router)

    @app.on_event("startup")
    def on_startup():
        setup_logging(settings.app_name, settings.log_level, settings.log_file)
        init_db()
        logger.info("%s started (env=%s)", settings.app_name, settings.app_env)

    @app.get("/", tags=["root"])
    def root():
        return {"name": settings.app_name, "env": settings.app_env}

    return app

app = create_app()
