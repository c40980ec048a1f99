import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from .core.config import Settings, get_settings
from .core.database import Database
from .routers import health, uploads, videos
from .services.upload_urls import UploadUrlIssuer, build_upload_url_issuer
from .services.video_seed import seed_sample_videos

logger = logging.getLogger(__name__)

_REGISTRATION_PATH = "/videos"
_REQUIRED_VIDEO_FIELDS = {"title", "s3_key"}


def _is_missing_required_field(error: dict) -> bool:
    loc = tuple(error.get("loc") or ())
    if loc == ("body",):
        return error.get("type") == "missing"
    if loc[-1:] and loc[-1] in _REQUIRED_VIDEO_FIELDS:
        return error.get("type") in {"missing", "string_too_short"} or error.get("input") is None
    return False


def _describe_errors(errors: list[dict]) -> str:
    parts = []
    for error in errors:
        field = ".".join(str(part) for part in error.get("loc", ())[1:]) or "body"
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    is_registration = request.method == "POST" and request.url.path.rstrip("/") == _REGISTRATION_PATH
    if is_registration and errors and all(_is_missing_required_field(error) for error in errors):
        detail = "Title and s3_key are required."
    else:
        detail = _describe_errors(errors)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})


async def _database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": "Server Error"})


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
    issuer: UploadUrlIssuer | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    database = database or Database.from_settings(settings)
    issuer = issuer or build_upload_url_issuer(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.create_all()
        if settings.seed_sample_videos:
            seed_sample_videos(database)
        try:
            yield
        finally:
            database.dispose()

    app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.upload_url_issuer = issuer

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, _database_error_handler)

    app.include_router(health.router)
    app.include_router(uploads.router)
    app.include_router(videos.router)

    if settings.static_dir is not None:
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="frontend")

    return app


app = create_app()
