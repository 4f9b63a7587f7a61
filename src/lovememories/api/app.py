"""
FastAPI application for lovememories.

Routes:
- POST /api/auth/verify: check a PIN (no PIN required)
- /api/photos, /api/notes: protected by the Authorization header; unknown ids give 404
- /api/uploads/<filename>: stored images (no PIN required, so they can be embedded)
- GET /api/health: health summary (no PIN required)
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .. import __version__
from ..config import get_database_path, get_uploads_dir
from ..error_handling import NotFoundError, UnauthorizedError
from ..health import get_health_status
from ..logging_config import get_logger
from ..services.credentials import CredentialStore, get_credential_store
from ..services.image_processor import ImageValidator
from ..services.memories import MemoryStorage, create_memory_storage
from . import auth, notes, photos

logger = get_logger(__name__)


async def handle_unauthorized(request: Request, exc: UnauthorizedError) -> JSONResponse:
    return JSONResponse(status_code=401, content={"message": exc.message})


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": exc.message})


def create_app(
    credential_store: CredentialStore | None = None,
    storage: MemoryStorage | None = None,
    image_validator: ImageValidator | None = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        credential_store: Shared PIN (defaults to the ACCESS_PIN setting)
        storage: Photo and note storage (defaults to DATABASE_PATH and UPLOADS_DIR)
        image_validator: Upload validation (defaults to MAX_UPLOAD_SIZE)

    Returns:
        The configured FastAPI application
    """
    credential_store = credential_store or get_credential_store()
    storage = storage or create_memory_storage(str(get_database_path()), str(get_uploads_dir()))
    image_validator = image_validator or ImageValidator()

    app = FastAPI(title="LoveMemories API", version=__version__)
    app.state.credential_store = credential_store
    app.state.storage = storage
    app.state.image_validator = image_validator

    app.add_exception_handler(UnauthorizedError, handle_unauthorized)  # type: ignore[arg-type]
    app.add_exception_handler(NotFoundError, handle_not_found)  # type: ignore[arg-type]

    app.include_router(auth.router)
    app.include_router(photos.router)
    app.include_router(notes.router)

    @app.get("/api/health")
    def health():
        status = get_health_status(storage.db_manager, storage.uploads)
        return JSONResponse(status_code=200 if status["status"] == "healthy" else 503, content=status)

    app.mount("/api/uploads", StaticFiles(directory=str(storage.uploads.uploads_dir)), name="uploads")

    logger.info(
        "api_app_created",
        uploads_dir=str(storage.uploads.uploads_dir),
        database=storage.db_manager.db_path,
    )
    return app
