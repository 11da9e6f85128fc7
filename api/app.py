import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from api.core.config import Settings, get_settings
from api.core.middleware import (
    NoCacheMiddleware,
    ReadOnlyMiddleware,
    RequestLogMiddleware,
    RewriteMiddleware,
)
from api.domain.rewrite import DEFAULT_RULES, compile_rules, load_rules_file
from api.repositories.json_storage import JsonDocumentStore, StorageError
from api.routers import pages as pages_router
from api.routers import resources as resources_router
from api.services.resource_service import ResourceError, ResourceService

logger = logging.getLogger(__name__)

BASE = os.path.dirname(__file__)
TEMPLATES = os.path.join(BASE, "templates")


def _error_response(code: str, message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": code, "message": message}, status_code=status_code)


async def _resource_error_handler(request: Request, exc: ResourceError) -> JSONResponse:
    return _error_response(exc.code, exc.message, exc.status_code)


async def _storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    return _error_response("storage", exc.message, 500)


def _rewrite_rules(settings: Settings) -> dict[str, str]:
    rules = dict(DEFAULT_RULES)
    if settings.routes_file:
        rules.update(load_rules_file(settings.routes_file))
    return rules


def create_app(settings: Settings | None = None, store: JsonDocumentStore | None = None) -> FastAPI:
    """
    Build the mock API around one store handle.

    The same app is served by uvicorn locally (api/serve.py) and by the
    hosted adapters (api/index.py, api/lambda_handler.py).
    """
    settings = settings or get_settings()
    if store is None:
        store = JsonDocumentStore(settings.db_path, persist=settings.persist)
        store.load()
    rules = _rewrite_rules(settings)

    app = FastAPI(title="JSON Mock API")
    app.state.settings = settings
    app.state.store = store
    app.state.resources = ResourceService(store, id_field=settings.id_field)
    app.state.templates = Jinja2Templates(directory=TEMPLATES)

    app.add_exception_handler(ResourceError, _resource_error_handler)
    app.add_exception_handler(StorageError, _storage_error_handler)

    # O ultimo middleware adicionado e o mais externo
    app.add_middleware(RewriteMiddleware, rules=compile_rules(rules))
    if settings.read_only:
        app.add_middleware(ReadOnlyMiddleware)
    if settings.no_cache:
        app.add_middleware(NoCacheMiddleware)
    origins = sorted(set(settings.cors_origins))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLogMiddleware)

    if os.path.isdir(settings.static_dir):
        app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")

    app.include_router(pages_router.router)
    app.include_router(resources_router.router)

    logger.info(
        "Serving %s (%d resources, persist=%s, read_only=%s), rewrite rules: %s",
        store.path,
        len(store.names()),
        store.persist,
        settings.read_only,
        ", ".join(f"{k} -> {v}" for k, v in rules.items()),
    )
    return app
