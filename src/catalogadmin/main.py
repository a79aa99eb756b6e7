from __future__ import annotations

import logging
import re
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.routing import compile_path

from .config import PROJECT_ROOT, settings
from .db import dispose_db, init_db
from .errors import CatalogError
from .routes.admins import router as admins_router
from .routes.categories import router as categories_router
from .routes.console import home_router
from .routes.console import router as console_router
from .routes.platforms import router as platforms_router
from .routes.software import router as software_router
from .routes.uploads import router as uploads_router


logger = logging.getLogger(__name__)

METHOD_ORDER = ("GET", "HEAD", "POST", "PUT", "DELETE")
STATIC_METHODS = {"GET", "HEAD"}

ROUTERS = (
    home_router,
    console_router,
    admins_router,
    platforms_router,
    categories_router,
    software_router,
    uploads_router,
)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _ensure_sqlite_dir() -> None:
    if settings.database_url.startswith("sqlite:///"):
        db_file = settings.database_url.replace("sqlite:///", "")
        db_path = Path(db_file)
        if not db_path.is_absolute():
            db_path = PROJECT_ROOT / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    _ensure_sqlite_dir()
    settings.uploads_root.mkdir(parents=True, exist_ok=True)
    init_db()
    logger.info("%s started (uploads under %s)", settings.app_name, settings.uploads_root)
    try:
        yield
    finally:
        dispose_db()


configure_logging()

app = FastAPI(title=settings.app_name, lifespan=lifespan)


def route_methods(routers: tuple[APIRouter, ...]) -> list[tuple[re.Pattern[str], set[str]]]:
    """Method sets per full route path, taken from the routers before inclusion."""
    table = []
    for router in routers:
        for route in router.routes:
            if not isinstance(route, APIRoute):
                continue
            path = route.path if route.path.startswith(router.prefix) else router.prefix + route.path
            regex, _format, _convertors = compile_path(path)
            table.append((regex, set(route.methods)))
    return table


def static_methods(*prefixes: str) -> list[tuple[re.Pattern[str], set[str]]]:
    return [(re.compile(f"^{re.escape(prefix)}/.*$"), STATIC_METHODS) for prefix in prefixes]


ROUTE_METHODS = route_methods(ROUTERS) + static_methods("/static", "/uploads")


def allowed_methods(path: str) -> list[str]:
    methods: set[str] = set()
    for regex, route_set in ROUTE_METHODS:
        if regex.match(path):
            methods.update(route_set)
    return sorted(methods, key=lambda m: METHOD_ORDER.index(m) if m in METHOD_ORDER else len(METHOD_ORDER))


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    headers = dict(exc.headers or {})
    if exc.status_code == 405:
        methods = allowed_methods(request.url.path)
        if methods:
            headers["Allow"] = ", ".join(methods)
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        messages.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
    return JSONResponse({"error": "; ".join(messages) or "Invalid request"}, status_code=400)


@app.exception_handler(CatalogError)
async def catalog_error(request: Request, exc: CatalogError):
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(Exception)
async def unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Internal Server Error"}, status_code=500)


app.mount("/static", StaticFiles(directory=str(settings.static_dir)), name="static")
app.mount("/uploads", StaticFiles(directory=str(settings.uploads_root), check_dir=False), name="uploads")
for router in ROUTERS:
    app.include_router(router)
