from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Any, Dict, List, Optional
import logging

from app.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

class AppError(Exception):
    """Base error rendered as a ``{success: false, message, error?}`` envelope."""
    status_code = 500

    def __init__(self, message: str, error: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message
        self.error = error
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

class ValidationError(AppError):
    status_code = 400

class InvalidStatusTransition(ValidationError):
    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot change status from '{current}' to '{requested}'")
        self.current = current
        self.requested = requested

class NotFoundError(AppError):
    status_code = 404

class UnexpectedError(AppError):
    status_code = 500

def _error_content(message: str, error: Optional[str] = None) -> Dict[str, Any]:
    return ErrorResponse(message=message, error=error).model_dump(exclude_none=True)

def _field_name(loc) -> str:
    # loc looks like ("body", "eventName") or ("path", "history_id")
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) if parts else "request body"

def describe_validation_errors(errors: List[Dict[str, Any]]) -> str:
    """Turn pydantic error dicts into one human-readable sentence."""
    missing = [_field_name(err["loc"]) for err in errors if err.get("type") == "missing"]
    invalid = [
        f"{_field_name(err['loc'])}: {err.get('msg')}"
        for err in errors if err.get("type") != "missing"
    ]

    parts = []
    if missing:
        parts.append(f"Missing required fields: {', '.join(missing)}")
    if invalid:
        parts.append(f"Invalid fields: {'; '.join(invalid)}")
    return ". ".join(parts) or "Invalid request"

async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"Unexpected error on {request.url}: {exc.message} ({exc.error})")
    else:
        logger.info(f"{exc.status_code} on {request.url}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(exc.message, exc.error),
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request validation failures are reported as 400 with the offending fields named."""
    message = describe_validation_errors(exc.errors())
    logger.info(f"Validation error on {request.url}: {message}")
    return JSONResponse(
        status_code=400,
        content=_error_content(message),
    )

async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.info(f"HTTP error on {request.url}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )

def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
