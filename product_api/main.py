"""
main.py — Application factory and server bootstrap

Builds the FastAPI app: logging, data store lifecycle, request-id and
security-header middleware, structured exception handlers, the products
router under the API prefix, documentation, and /health.

Business Rules:
- A failed database connection at startup is logged, not fatal
- Every response carries X-Request-ID and OWASP security headers
- Every error response uses the ErrorResponse envelope
- Input validation failures are 400, never 422

Called by: uvicorn (product_api.main:app), tests/conftest.py (create_app)
Depends on: config, database, docs, logging_config, routers/products, validation
"""

import time
import uuid
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .database import Database, connect_db
from .docs import mount_docs
from .logging_config import setup_logging
from .routers import products
from .schemas.errors import ErrorResponse, FieldError
from .validation import InputValidationError

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    detail: list[FieldError] | None = None,
    headers: dict | None = None,
) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "")
    body = ErrorResponse(error=error, status_code=status_code, request_id=request_id, detail=detail)
    headers = {**(headers or {}), **SECURITY_HEADERS}
    if request_id:
        headers["X-Request-ID"] = request_id
    return JSONResponse(body.model_dump(mode="json"), status_code=status_code, headers=headers)


def _field_errors(exc: RequestValidationError) -> list[FieldError]:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "path", "query")]
        errors.append(FieldError(field=".".join(loc) or "body", message=err.get("msg", "Invalid value")))
    return errors


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the application. A passed-in database stays owned by the caller."""
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.database is None
        if owned:
            app.state.database = Database.from_settings(settings)
        if settings.db_connect_on_startup:
            await run_in_threadpool(connect_db, app.state.database)
        yield
        if owned:
            app.state.database.dispose()
            app.state.database = None
        logger.info("Shutdown complete")

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        description=settings.app_description,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.database = database

    # ── Middleware ───────────────────────────────────────────────────

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request_id = uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        start = time.perf_counter()
        status_code = 500
        with logger.contextualize(request_id=request_id):
            try:
                response = await call_next(request)
                status_code = response.status_code
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000
                logger.info(
                    "{} {} -> {} ({:.1f} ms)",
                    request.method, request.url.path, status_code, elapsed_ms,
                )
        response.headers["X-Request-ID"] = request_id
        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        return response

    # ── Exception handlers ───────────────────────────────────────────

    @app.exception_handler(InputValidationError)
    async def input_validation_handler(request: Request, exc: InputValidationError):
        logger.info("Validation failed: {}", exc)
        return _error_response(request, 400, "Validation failed", detail=exc.errors)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error_response(request, 400, "Validation failed", detail=_field_errors(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(request, exc.status_code, str(exc.detail), headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
        return _error_response(request, 500, "Internal server error")

    # ── Routes ───────────────────────────────────────────────────────

    app.include_router(products.router, prefix=settings.api_prefix)
    mount_docs(app, settings)

    @app.get("/health", include_in_schema=False)
    async def health():
        return {"status": "ok", "version": settings.app_version}

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
