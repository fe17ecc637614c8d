"""
Error taxonomy and the HTTP mapping for it.

ValidationError and MalformedRequestError map to 400, NotFoundError to 404 and
StoreError (or anything unexpected) to 500 with a generic body. The cause of a
500 is only ever logged, never returned.
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Internal Server Error"


class NetMonError(Exception):
    """Base class for dashboard API errors."""


class ValidationError(NetMonError):
    """Request data failed field-level checks."""

    def __init__(self, errors: List[Dict[str, str]], message: str = "Validation failed"):
        super().__init__(message)
        self.message = message
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])


class NotFoundError(NetMonError):
    """A lookup targeted a record that does not exist."""

    def __init__(self, resource: str, record_id: Optional[int] = None):
        self.resource = resource
        self.record_id = record_id
        if record_id is None:
            super().__init__(f"No {resource.lower()} found")
        else:
            super().__init__(f"{resource} with id {record_id} not found")


class MalformedRequestError(NetMonError):
    """Path or query parameters could not be interpreted."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class StoreError(NetMonError):
    """The underlying persistence layer failed."""


def _trace_id(request: Request) -> str:
    return getattr(request.state, "trace_id", None) or str(uuid.uuid4())


def _field_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        # Drop the "body"/"path"/"query" prefix, keep it as the location
        location = loc[0] if loc else "body"
        field = ".".join(loc[1:]) or location
        errors.append({"field": field, "location": location, "message": err.get("msg", "Invalid value")})
    return errors


async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message, "errors": exc.errors},
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = _field_errors(exc)
    if errors and all(e["location"] in ("path", "query") for e in errors):
        detail = "Malformed request parameters"
    else:
        detail = "Validation failed"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": detail, "errors": errors},
    )


async def malformed_request_handler(request: Request, exc: MalformedRequestError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message, "errors": exc.errors},
    )


async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)},
    )


async def store_error_handler(request: Request, exc: StoreError):
    trace_id = _trace_id(request)
    logger.error(
        f"[{trace_id}] Store failure on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": GENERIC_SERVER_ERROR, "trace_id": trace_id},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    trace_id = _trace_id(request)
    logger.error(
        f"[{trace_id}] Unhandled exception: {type(exc).__name__}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": GENERIC_SERVER_ERROR, "trace_id": trace_id},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error taxonomy handlers to the application."""
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(MalformedRequestError, malformed_request_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
