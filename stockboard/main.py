"""Main FastAPI application with async support and middleware.
"""
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stockboard.api.v1 import health
from stockboard.api.v1 import market
from stockboard.api.v1 import wishlist
from stockboard.core.config import get_settings
from stockboard.core.deps import cleanup_http_client, cleanup_supabase_client
from stockboard.core.docs import API_CONTACT
from stockboard.core.docs import API_DESCRIPTION
from stockboard.core.docs import API_TITLE
from stockboard.core.docs import API_VERSION
from stockboard.core.docs import OPENAPI_TAGS
from stockboard.core.docs import custom_openapi_schema
from stockboard.core.docs import get_swagger_ui_html_config
from stockboard.core.exceptions import StockboardError
from stockboard.utils.structured_logging import configure_structured_logging
from stockboard.utils.structured_logging import get_logger

_settings = get_settings()
configure_structured_logging(
    log_level=_settings.log_level, json_logs=not _settings.is_development
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan management.

    Validates backend configuration on startup and closes the shared
    upstream clients on shutdown.
    """
    settings = get_settings()

    # Startup
    logger.info(
        "Starting Stockboard API",
        environment=settings.environment,
        market_data_provider=settings.market_data_provider,
        auth_backend=settings.auth_backend,
    )

    try:
        if settings.auth_backend == "supabase":
            if not settings.supabase_url or not settings.supabase_service_role_key:
                error_msg = (
                    "Supabase is not configured. When using AUTH_BACKEND=supabase, "
                    "you must set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY in your .env file."
                )
                logger.error(error_msg)
                raise ValueError(error_msg)

        if settings.market_data_provider == "live" and not settings.finnhub_api_key:
            logger.warning("FINNHUB_API_KEY is not configured; search, profile and quote will fail")

        logger.info("Application initialized successfully")

        yield

    finally:
        # Shutdown
        logger.info("Shutting down Stockboard API")
        await cleanup_http_client()
        await cleanup_supabase_client()
        logger.info("Application shutdown complete")


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if location:
        return f"Invalid request: {location}: {first.get('msg', 'invalid value')}"
    return f"Invalid request: {first.get('msg', 'invalid value')}"


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        contact=API_CONTACT,
        openapi_tags=OPENAPI_TAGS,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        debug=settings.debug,
        lifespan=lifespan,
        swagger_ui_parameters=get_swagger_ui_html_config()["swagger_ui_parameters"]
        if settings.is_development
        else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )

    @app.exception_handler(StockboardError)
    async def stockboard_error_handler(request: Request, exc: StockboardError) -> JSONResponse:
        """Render domain errors as ``{"error": message}`` with their status."""
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "Request failed",
            error_type=type(exc).__name__,
            error=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
            method=request.method,
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Render request validation failures as 400 ``{"error": message}``."""
        message = _validation_message(exc)
        logger.info("Request validation failed", error=message, path=request.url.path)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler for unhandled exceptions.

        Args:
            request: The incoming request
            exc: The exception that occurred

        Returns:
            JSONResponse: Error response
        """
        logger.error(
            "Unhandled exception occurred",
            exc_info=exc,
            path=str(request.url.path),
            method=request.method,
        )

        if settings.is_development:
            # In development, include more error details
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "Server error",
                    "detail": str(exc),
                    "type": type(exc).__name__,
                },
            )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Server error"},
        )

    # Include routers
    app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])

    app.include_router(market.router, prefix=settings.api_prefix, tags=["market"])

    app.include_router(
        wishlist.router, prefix=f"{settings.api_prefix}/wishlist", tags=["wishlist"]
    )

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        """Root endpoint.

        Returns:
            dict: Welcome message with links
        """
        return {
            "message": "Stockboard API",
            "version": API_VERSION,
            "docs": "/docs" if settings.is_development else "disabled",
            "health": f"{settings.api_prefix}/health",
        }

    # Set custom OpenAPI schema with enhanced documentation
    if settings.is_development:
        app.openapi = lambda: custom_openapi_schema(app)

    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "stockboard.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
