# bookstore/main.py
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .catalog import books_router, reviews_router
from .catalog.auth import SharedSecretCheck
from .config import Settings, settings as default_settings
from .errors import CatalogError
from .logging_config import access_log_middleware, setup_logging
from .storage import COLLECTIONS, CollectionStore

logger = logging.getLogger(__name__)


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed bodies and query values are client errors, reported as 400.
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        problems.append(f"{location}: {err.get('msg')}")
    message = "Invalid request: " + "; ".join(problems)
    logger.info("%s %s rejected (400): %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the bookstore application.

    Logging is configured first, then the collection files under
    ``settings.data_dir`` are created if missing. The shared-secret
    gate is installed on ``app.state.credential_check`` only when
    ``settings.auth_enabled`` is true; leaving it ``None`` opens the
    mutating routes.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.project_name,
        description="Catalog of books and reader reviews backed by JSON files.",
        version=settings.api_version,
    )

    store = CollectionStore(settings.data_dir)
    for name in COLLECTIONS:
        store.initialize(name)
    app.state.settings = settings
    app.state.store = store
    app.state.credential_check = SharedSecretCheck(settings.api_key) if settings.auth_enabled else None

    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.middleware("http")(access_log_middleware)

    @app.get("/")
    def welcome():
        return {"message": "Welcome to the Bookstore API!"}

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    app.include_router(books_router)
    app.include_router(reviews_router)

    logger.info(
        "Bookstore API ready (data dir %s, auth %s)",
        store.data_dir,
        "enabled" if settings.auth_enabled else "disabled",
    )
    return app


app = create_app()
