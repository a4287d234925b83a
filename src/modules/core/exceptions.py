"""Domain error taxonomy and the DRF exception handler.

Services raise subclasses of ``DomainError``; the handler registered as
``REST_FRAMEWORK["EXCEPTION_HANDLER"]`` renders them, together with DRF's
own exceptions, in a single envelope::

    {"type": "client_error", "errors": [{"code": ..., "detail": ..., "attr": ...}]}
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = structlog.get_logger(__name__)

VALIDATION_ERROR = "validation_error"
CLIENT_ERROR = "client_error"
SERVER_ERROR = "server_error"


class DomainError(Exception):
    """Base class for business rule violations raised by services."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_type = CLIENT_ERROR
    code = "domain_error"

    def __init__(self, detail: str, attr: Optional[str] = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.attr = attr


class DomainValidationError(DomainError):
    """Input is well-formed but violates a business validation rule."""

    error_type = VALIDATION_ERROR
    code = "invalid"


class ConflictError(DomainError):
    """The operation collides with existing state."""

    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class NotFoundError(DomainError):
    """A referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


# ---------------------------------------------------------------------------
# Envelope helpers
# ---------------------------------------------------------------------------


def error_body(
    error_type: str, errors: Iterable[Dict[str, Any]]
) -> Dict[str, Any]:
    return {"type": error_type, "errors": list(errors)}


def validation_error_response(exc: PydanticValidationError) -> Response:
    """Build a 400 response listing every field pydantic rejected."""
    errors: List[Dict[str, Any]] = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        errors.append(
            {
                "code": err.get("type", "invalid"),
                "detail": err.get("msg", ""),
                "attr": ".".join(loc) or None,
            }
        )
    return Response(
        error_body(VALIDATION_ERROR, errors),
        status=status.HTTP_400_BAD_REQUEST,
    )


def _flatten_drf_detail(
    detail: Any, attr: Optional[str] = None
) -> List[Dict[str, Any]]:
    if isinstance(detail, dict):
        errors: List[Dict[str, Any]] = []
        for key, value in detail.items():
            nested = key if attr is None else f"{attr}.{key}"
            if key == "non_field_errors":
                nested = attr
            errors.extend(_flatten_drf_detail(value, nested))
        return errors
    if isinstance(detail, list):
        errors = []
        for item in detail:
            errors.extend(_flatten_drf_detail(item, attr))
        return errors
    return [
        {
            "code": getattr(detail, "code", "error"),
            "detail": str(detail),
            "attr": attr,
        }
    ]


def exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """Render domain and DRF exceptions in the standard error envelope.

    Returns ``None`` for anything else so Django produces its default 500.
    """
    if isinstance(exc, DomainError):
        logger.info(
            "domain_error",
            error=exc.__class__.__name__,
            detail=exc.detail,
            status_code=exc.status_code,
        )
        return Response(
            error_body(
                exc.error_type,
                [{"code": exc.code, "detail": exc.detail, "attr": exc.attr}],
            ),
            status=exc.status_code,
        )

    if isinstance(exc, PydanticValidationError):
        return validation_error_response(exc)

    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.ValidationError):
        error_type = VALIDATION_ERROR
    elif response.status_code >= 500:
        error_type = SERVER_ERROR
    else:
        error_type = CLIENT_ERROR

    response.data = error_body(error_type, _flatten_drf_detail(exc.detail))
    return response
