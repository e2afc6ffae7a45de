"""FastAPI application entry point."""

import logging
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from umrah_booking.api.v1.router import api_router
from umrah_booking.config import Settings, get_settings
from umrah_booking.core.exceptions import AppException
from umrah_booking.core.idempotency import ProcessedEventStore
from umrah_booking.core.logging_config import configure_logging
from umrah_booking.core.middleware import (
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from umrah_booking.services.gateway_service import build_payment_gateway
from umrah_booking.services.inquiry_service import InquiryStore

logger = logging.getLogger(__name__)


def _validation_messages(errors: list[dict]) -> list[str]:
    messages = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return messages


def create_application(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Umrah tour packages, booking and deposit checkout API",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )

    app.state.settings = settings
    app.state.gateway = build_payment_gateway(settings)
    app.state.event_store = ProcessedEventStore()
    app.state.inquiry_store = InquiryStore(settings.inquiries_dir)

    # Exception handlers
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle custom application exceptions."""
        content: dict = {"error": exc.detail}
        errors = getattr(exc, "errors", None)
        if errors:
            content["errors"] = errors
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed request bodies are client errors, reported as 400."""
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "errors": _validation_messages(exc.errors())},
        )

    # Middleware (order matters - first added = last executed)
    # 1. Security headers (outermost)
    app.add_middleware(SecurityHeadersMiddleware, enable_hsts=not settings.debug)

    # 2. Rate limiting (outside development only)
    if settings.environment != "development":
        app.add_middleware(
            RateLimitMiddleware,
            redis_url=settings.redis_url,
            requests_per_minute=settings.rate_limit_per_minute,
            exempt_prefixes=(f"{settings.api_prefix}/webhooks",),
        )

    # 3. Request logging
    app.add_middleware(RequestLoggingMiddleware)

    # 4. CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 5. Gzip compression (innermost)
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Include API routes
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.app_version,
            "environment": settings.environment,
            "stripeConfigured": settings.stripe_configured,
            "paymentGateway": app.state.gateway.gateway_type.value,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    @app.get("/")
    async def root() -> dict:
        """Root endpoint."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs" if settings.debug else None,
        }

    logger.info(f"{settings.app_name} ready ({settings.environment})")
    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "umrah_booking.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
    )
