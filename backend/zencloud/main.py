"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from zencloud import __version__
from zencloud.config import Settings, settings as default_settings
from zencloud.database import build_engine, build_session_factory
from zencloud.middleware.cors import CrossOriginPolicyMiddleware
from zencloud.middleware.upload_limit import UploadSizeLimitMiddleware
from zencloud.models import Base
from zencloud.routes.files import router as files_router
from zencloud.services.blob_store import BlobStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the upload directory and the metadata table, share one engine."""
    settings: Settings = app.state.settings

    blob_store = BlobStore(settings.UPLOAD_DIR)
    blob_store.ensure_dir()
    app.state.blob_store = blob_store
    logger.info("Blob store at %s", blob_store.base_path.resolve())

    engine = build_engine(settings)
    app.state.engine = engine
    app.state.session_factory = None
    if engine is not None:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        app.state.session_factory = build_session_factory(engine)
        logger.info("Metadata store ready")

    yield

    # Cleanup
    if engine is not None:
        await engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title="ZenCloud API",
        version=__version__,
        description="Upload, list, download and delete files.",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Last added runs first: the policy headers also cover size rejections.
    app.add_middleware(UploadSizeLimitMiddleware, max_bytes=settings.MAX_UPLOAD_BYTES)
    app.add_middleware(
        CrossOriginPolicyMiddleware,
        allow_origin=settings.CORS_ORIGIN,
        allow_methods=settings.CORS_METHODS,
        allow_headers=settings.CORS_HEADERS,
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.add_api_route("/health", health_check, methods=["GET"])
    app.include_router(files_router)
    return app


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        message = "Method not allowed"
    else:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return PlainTextResponse(message, status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return PlainTextResponse(message, status_code=400)


async def health_check(request: Request):
    """Verify API and database connectivity."""
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        return {"status": "error", "database": "not configured"}
    try:
        async with session_factory() as db:
            await db.execute(text("SELECT 1"))
        return {"status": "ok", "database": "connected"}
    except Exception as e:
        return {"status": "error", "database": str(e)}


app = create_app()
