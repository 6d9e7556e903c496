"""
Global Error Handlers
"""
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import traceback
from typing import Union

from config.settings import settings
from config.logging_config import log_error
from core.exceptions import BaseAppException

logger = logging.getLogger(__name__)


async def http_exception_handler(
    request: Request,
    exc: Union[HTTPException, StarletteHTTPException]
) -> JSONResponse:
    """Handle HTTP exceptions"""
    request_id = getattr(request.state, "request_id", "unknown")

    error_response = {
        "success": False,
        "error": {
            "type": "http_error",
            "message": exc.detail if hasattr(exc, "detail") else str(exc),
            "status_code": exc.status_code,
            "request_id": request_id
        }
    }

    return JSONResponse(
        status_code=exc.status_code,
        content=error_response,
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle request body/query validation errors"""
    request_id = getattr(request.state, "request_id", "unknown")

    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"] if loc != "body")
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"]
        })

    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": {
                "type": "validation_error",
                "message": "Request validation failed",
                "details": errors,
                "request_id": request_id
            }
        }
    )


async def app_exception_handler(
    request: Request,
    exc: BaseAppException
) -> JSONResponse:
    """Handle application exceptions using their own status code"""
    request_id = getattr(request.state, "request_id", "unknown")
    status_code = exc.status_code

    error_response = {
        "success": False,
        "error": {
            "type": exc.error_code,
            "message": exc.message,
            "request_id": request_id
        }
    }
    if exc.details:
        error_response["error"]["details"] = exc.details

    if status_code >= 500:
        log_error(logger, exc, {"request_id": request_id, "path": request.url.path})
    else:
        logger.warning(f"Client error [{request_id}]: {type(exc).__name__}: {exc.message}")

    return JSONResponse(status_code=status_code, content=error_response)


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions"""
    request_id = getattr(request.state, "request_id", "unknown")

    log_error(logger, exc, {"request_id": request_id, "path": request.url.path})

    error_response = {
        "success": False,
        "error": {
            "type": "internal_error",
            "message": "An unexpected error occurred",
            "request_id": request_id
        }
    }

    if settings.debug:
        error_response["error"]["debug"] = {
            "exception": type(exc).__name__,
            "message": str(exc),
            "traceback": traceback.format_exc().split("\n")
        }

    return JSONResponse(status_code=500, content=error_response)


def register_exception_handlers(app):
    """Register all exception handlers with the app"""
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Subclasses resolve to this handler through the MRO
    app.add_exception_handler(BaseAppException, app_exception_handler)

    # General exceptions (must be last)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("✅ Exception handlers registered")
