"""Translation of domain and store errors into JSON responses."""

from typing import Any

import logfire
from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from tally.domain.error import (
    AdmissionRejectedError,
    DomainError,
    NotFoundError,
    ValidationError,
)


def status_for(error: DomainError) -> int:
    """HTTP status for a domain error. Unlisted errors are store failures."""
    if isinstance(error, AdmissionRejectedError):
        return status.HTTP_429_TOO_MANY_REQUESTS
    if isinstance(error, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(error, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def domain_error_response(error: DomainError, **extra: Any) -> JSONResponse:
    """Build the `{ok: false, error}` response for a domain error."""
    status_code = status_for(error)
    content: dict[str, Any] = {"ok": False, "error": str(error), **extra}
    if isinstance(error, AdmissionRejectedError):
        content["error"] = "Too Many Requests"
        content["rate_key"] = error.admission_key
    if status_code >= 500:
        logfire.error("Store operation failed", error=str(error))
    return JSONResponse(status_code=status_code, content=content)


def store_error_response(error: SQLAlchemyError, **extra: Any) -> JSONResponse:
    """Build the 500 response for an untranslated database failure."""
    logfire.error("Database failure", error=str(error), error_type=type(error).__name__)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"ok": False, "error": "Store unavailable", **extra},
    )


def client_address(request: Request) -> str | None:
    """Caller address: first X-Forwarded-For hop, then X-Real-IP, then the peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client:
        return request.client.host
    return None
