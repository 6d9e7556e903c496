"""
Request/Response Logging Middleware
"""
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import time
import logging
import uuid

logger = logging.getLogger(__name__)

# Probes and docs are not logged
SKIP_PATHS = (
    "/api/health",
    "/docs",
    "/openapi.json",
    "/favicon.ico"
)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Assigns a request id and logs one line per request and response"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        if request.url.path.startswith(SKIP_PATHS):
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response

        client_host = request.client.host if request.client else "unknown"
        context = {"request_id": request_id}
        logger.info(f"→ {request.method} {request.url.path} from {client_host}", extra=context)

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            duration = (time.time() - start_time) * 1000
            logger.error(
                f"✗ {request.method} {request.url.path} failed after {duration:.2f}ms: "
                f"{type(e).__name__}: {e}",
                extra=context
            )
            raise

        duration = (time.time() - start_time) * 1000
        if response.status_code >= 500:
            log_level = logging.ERROR
        elif response.status_code >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            f"← {response.status_code} {request.method} {request.url.path} ({duration:.2f}ms)",
            extra=context
        )

        response.headers["X-Request-ID"] = request_id
        return response
