"""
Domain errors raised by services and security helpers.

Each error carries the HTTP status it maps to.  ``register_error_handlers``
installs one exception handler on the application that turns these
errors into responses, so services never build HTTP responses
themselves.  Validation failures answer with an empty body; the other
kinds answer with a ``{"detail": ...}`` JSON object.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for errors that terminate a request."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail)
        self.detail = detail


class ValidationError(ServiceError):
    """A required request field is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str = "Invalid request body", errors: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__(detail)
        self.errors = errors or []


class AuthError(ServiceError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDeniedError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT


def _error_summary(errors: List[Dict[str, Any]]) -> List[Tuple[Any, Any]]:
    # Only location and type: pydantic entries also carry the offending
    # input, which for signup includes the plain password.
    return [(tuple(e.get("loc", ())), e.get("type")) for e in errors]


async def service_error_handler(request: Request, exc: ServiceError) -> Response:
    if isinstance(exc, ValidationError):
        logger.info(
            "Rejected %s %s: %s", request.method, request.url.path, _error_summary(exc.errors) or exc.detail
        )
        return Response(status_code=exc.status_code)
    headers = None
    if isinstance(exc, AuthError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    # Malformed JSON or path parameters are client errors of the same kind
    # as a missing field and get the same empty 400.
    logger.info("Rejected %s %s: %s", request.method, request.url.path, _error_summary(exc.errors()))
    return Response(status_code=status.HTTP_400_BAD_REQUEST)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
