"""
api/main.py -- FastAPI application entry point for ScentShop.

Exposes the product/category catalog and member auth over HTTP.

Run with:      python main.py
               uvicorn api.main:app --reload

Middleware stack (outermost to innermost):
  1. CORSMiddleware   -- adds CORS headers for the configured origins
  2. log_requests     -- one log line per request with latency

Lifespan opens the single MongoDB handle on startup, builds the stores on
app.state, and closes the handle on shutdown.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError, PyMongoError

from api.models import ErrorDetail, ErrorResponse, HealthResponse
from api.routes.auth import router as auth_router
from api.routes.categories import router as categories_router
from api.routes.products import router as products_router
from auth.store import MemberStore
from catalog.store import CategoryStore, ProductStore
from core.config import get_settings
from core.database import Database

_VERSION = "1.0.0"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("scentshop.api")

_settings = get_settings()


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database once, wire the stores, and close it on shutdown.

    The behaviour switches are copied onto app.state so route handlers and
    dependencies read them per request instead of importing settings.
    """
    logger.info("ScentShop API starting up")
    database = Database(_settings.database, _settings.database_name, timeout_ms=_settings.database_timeout_ms)
    if database.ping():
        logger.info("Connected to MongoDB")
    else:
        logger.error("MongoDB is not reachable -- requests will fail until it is")
    app.state.database = database
    app.state.member_store = MemberStore(database.db, unique_usernames=_settings.unique_keys)
    app.state.products = ProductStore(database.db, unique_ids=_settings.unique_keys)
    app.state.categories = CategoryStore(database.db, unique_ids=_settings.unique_keys)
    app.state.require_auth = _settings.require_auth
    app.state.strict_not_found = _settings.strict_not_found
    logger.info(
        "Stores initialized (require_auth=%s, strict_not_found=%s, unique_keys=%s)",
        _settings.require_auth,
        _settings.strict_not_found,
        _settings.unique_keys,
    )

    yield

    database.close()
    logger.info("ScentShop API shutdown complete")


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="ScentShop API",
    description="Perfume storefront backend: products, categories and member login.",
    version=_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
    expose_headers=["Authorization"],
    max_age=3600,
)


# ---------------------------------------------------------------------------
# Request logging middleware
# ---------------------------------------------------------------------------


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d %.1fms %s",
        request.method,
        request.url.path,
        response.status_code,
        ms,
        request.client.host if request.client else "unknown",
    )
    return response


# ---------------------------------------------------------------------------
# Router registration
# ---------------------------------------------------------------------------

app.include_router(auth_router, tags=["Auth"])
app.include_router(products_router, tags=["Products"])
app.include_router(categories_router, tags=["Categories"])


# ---------------------------------------------------------------------------
# Exception handlers
#
# All handlers return the same ErrorResponse envelope so API clients can parse
# errors uniformly. Success confirmations stay plain text.
# ---------------------------------------------------------------------------


def _error(status_code: int, code: str, message: str, detail: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=ErrorDetail(code=code, message=message, detail=detail)).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 422 when a body is not a JSON object or lacks required auth fields."""
    return _error(422, "validation_error", "Request validation failed.", str(exc.errors()))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Return a structured error for all FastAPI/Starlette HTTP exceptions.

    Route handlers raise HTTPException with detail=ErrorDetail(...).model_dump()
    (a dict). When detail is already a structured dict, use it directly.
    """
    if isinstance(exc.detail, dict):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})
    return _error(exc.status_code, f"http_{exc.status_code}", str(exc.detail))


@app.exception_handler(DuplicateKeyError)
async def duplicate_key_handler(request: Request, exc: DuplicateKeyError) -> JSONResponse:
    """Only reachable with UNIQUE_KEYS=true, when a unique index rejects a write."""
    return _error(409, "conflict", "A record with that key already exists.")


@app.exception_handler(PyMongoError)
async def storage_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    """Any database failure becomes a 500. Nothing is retried.

    The exception type is reported; the message stays in the server log
    because it can carry connection strings and hostnames.
    """
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return _error(500, "storage_error", "Database operation failed.", type(exc).__name__)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected server errors."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _error(500, "internal_error", "An unexpected error occurred.")


# ---------------------------------------------------------------------------
# Health endpoint
# ---------------------------------------------------------------------------


@app.get("/health", tags=["Health"])
def health(request: Request) -> HealthResponse:
    """Return liveness plus a database ping."""
    database: Database = request.app.state.database
    return HealthResponse(
        version=_VERSION,
        components={"app": "ok", "database": "ok" if database.ping() else "error"},
    )
