"""FastAPI application factory and setup."""

import sys
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from src.catalog_api.api.http.app_data import ApplicationDependencies
from src.catalog_api.api.http.routers.health import router as health_router
from src.catalog_api.api.http.routers.service.product import router as product_router
from src.catalog_api.api.utils.app_startup import configure_logging
from src.catalog_api.core.errors import ApiError, ErrorKind
from src.catalog_api.entities.service.product import SAMPLE_PRODUCTS, ProductStore
from src.catalog_api.runtime.config.config_data import ConfigData
from src.catalog_api.runtime.context import get_config


# --- Security middleware ---
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


# --- Error boundary ---
def _error_response(error: ApiError, request_id: str | None = None) -> JSONResponse:
    # Faults caught in log_requests never pass back through SecurityHeadersMiddleware
    headers = dict(SECURITY_HEADERS)
    if request_id:
        headers["X-Request-ID"] = request_id
    return JSONResponse(
        status_code=error.status_code, content=error.to_envelope(), headers=headers
    )


async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    logger.bind(
        status_code=exc.status_code, error_kind=exc.kind.value
    ).warning("request.rejected: {}", exc.message)
    return _error_response(exc)


async def handle_http_error(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    # Unmatched paths and unsupported methods both read as unknown routes
    if exc.status_code in (404, 405):
        error = ApiError.not_found(
            f"Cannot {request.method} {request.url.path} - Resource not found"
        )
    else:
        error = ApiError(ErrorKind.from_status(exc.status_code), str(exc.detail))
    return await handle_api_error(request, error)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    return await handle_api_error(request, ApiError.validation_failed(messages))


async def log_requests(request: Request, call_next):
    # Correlation / tracing
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            # Never leak internals to the client
            return _error_response(ApiError.internal(), request_id)


async def simulate_error() -> None:
    """Raise an unexpected fault to exercise the internal-error path."""
    raise RuntimeError("This is a test error")


def create_app(
    config: ConfigData | None = None, store: ProductStore | None = None
) -> FastAPI:
    """Build the application.

    Args:
        config: Configuration to serve with; defaults to the active context.
        store: Product store to serve; a fresh one is created (and seeded
            when ``catalog.seed_sample_data`` is set) when omitted.
    """
    config = config or get_config()
    configure_logging(config)

    if store is None:
        store = ProductStore(SAMPLE_PRODUCTS if config.catalog.seed_sample_data else ())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Starting {} in {} environment with {} products",
            config.app.name,
            config.app.environment,
            store.count(),
        )
        try:
            yield
        finally:
            logger.info("Shutting down application")

    is_production = config.app.environment == "production"
    app = FastAPI(
        title=config.app.name,
        version=config.app.version,
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )
    app.state.app_dependencies = ApplicationDependencies(
        config=config, product_store=store
    )

    app.add_middleware(SecurityHeadersMiddleware)

    # --- CORS configuration ---
    if is_production and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )

    app.middleware("http")(log_requests)

    app.add_exception_handler(ApiError, handle_api_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)

    # --- Router registration ---
    app.include_router(health_router)
    app.include_router(product_router, prefix="/api/products")
    if not is_production:
        app.add_api_route(
            "/test-error", simulate_error, methods=["GET"], include_in_schema=False
        )

    return app


def main() -> None:
    """Run the API with uvicorn; faults outside request handling end the process."""
    import uvicorn

    try:
        config = get_config()
        uvicorn.run(
            create_app(config),
            host=config.app.host,
            port=config.app.port,
            access_log=False,  # We handle access logging in middleware
        )
    except Exception:
        logger.exception("Fatal error outside request handling; shutting down")
        sys.exit(1)


__all__ = ["create_app", "main"]


if __name__ == "__main__":
    main()
