"""Custom middleware for the application."""

import logging
import time

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

import redis.asyncio as redis

logger = logging.getLogger(__name__)

EXEMPT_PATHS = ("/health", "/docs", "/redoc", "/openapi.json")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rate limiting middleware using Redis sliding window."""

    def __init__(
        self,
        app,
        redis_url: str,
        requests_per_minute: int = 100,
        exempt_prefixes: tuple[str, ...] = (),
    ):
        """Initialize rate limiter.

        Args:
            app: FastAPI application
            redis_url: Redis connection URL
            requests_per_minute: Max requests per minute per IP
            exempt_prefixes: Path prefixes never throttled (webhooks)
        """
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.redis_url = redis_url
        self.exempt_prefixes = exempt_prefixes
        self._redis: redis.Redis | None = None

    async def get_redis(self) -> redis.Redis:
        """Get Redis connection."""
        if self._redis is None:
            self._redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._redis

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP from request."""
        # Check for forwarded headers (behind proxy/load balancer)
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        return request.client.host if request.client else "unknown"

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request with rate limiting.

        Args:
            request: Incoming request
            call_next: Next middleware/route handler

        Returns:
            Response: Route response or rate limit error
        """
        path = request.url.path
        if path in EXEMPT_PATHS or path.startswith(self.exempt_prefixes):
            return await call_next(request)

        try:
            redis_client = await self.get_redis()
            client_ip = self._get_client_ip(request)
            key = f"rate_limit:{client_ip}"
            current_time = int(time.time())
            window_start = current_time - 60  # 1 minute window

            async with redis_client.pipeline(transaction=True) as pipe:
                await pipe.zremrangebyscore(key, 0, window_start)
                await pipe.zcard(key)
                await pipe.zadd(key, {str(time.time_ns()): current_time})
                await pipe.expire(key, 60)
                results = await pipe.execute()

            request_count = results[1]
        except redis.RedisError as e:
            # If Redis is down, allow request through
            logger.warning(f"Rate limiter unavailable, allowing request: {e}")
            return await call_next(request)

        if request_count >= self.requests_per_minute:
            logger.info(f"Rate limit exceeded for {client_ip} on {path}")
            return JSONResponse(
                status_code=429,
                content={
                    "error": "Too many requests. Please try again later.",
                    "retry_after": 60,
                },
                headers={
                    "Retry-After": "60",
                    "X-RateLimit-Limit": str(self.requests_per_minute),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(current_time + 60),
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.requests_per_minute)
        response.headers["X-RateLimit-Remaining"] = str(
            max(0, self.requests_per_minute - request_count - 1)
        )
        response.headers["X-RateLimit-Reset"] = str(current_time + 60)
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests and response times."""

    def __init__(self, app, slow_request_seconds: float = 1.0):
        super().__init__(app)
        self.slow_request_seconds = slow_request_seconds

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request details and timing.

        Args:
            request: Incoming request
            call_next: Next middleware/route handler

        Returns:
            Response: Route response
        """
        start_time = time.time()

        request_id = request.headers.get("X-Request-ID") or str(time.time_ns())
        request.state.request_id = request_id

        response = await call_next(request)

        duration = time.time() - start_time

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration:.3f}s"

        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({duration:.3f}s) [{request_id}]"
        )
        if duration > self.slow_request_seconds:
            logger.warning(
                f"SLOW REQUEST: {request.method} {request.url.path} took {duration:.3f}s"
            )

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to responses."""

    def __init__(self, app, enable_hsts: bool = True):
        super().__init__(app)
        self.enable_hsts = enable_hsts

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to response."""
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if self.enable_hsts:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        return response
