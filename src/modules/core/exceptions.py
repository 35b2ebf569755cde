"""Error taxonomy shared by every module, and its HTTP translation.

Services raise subclasses of ``DomainError``; they never build HTTP
responses.  ``api_exception_handler`` (wired through
``REST_FRAMEWORK["EXCEPTION_HANDLER"]``) renders domain errors, DRF
errors and unexpected failures with one body shape::

    {"type": "client_error", "errors": [{"code": ..., "detail": ..., "attr": ...}]}

Unexpected failures (store outages, timeouts, bugs) are logged with their
traceback and answered with a generic 500; the raw message is never sent
to the client.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.views import set_rollback

logger = structlog.get_logger(__name__)


class DomainError(Exception):
    """Base class for business errors raised by the service layer."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_request"


class InvalidRequest(DomainError):
    """Malformed input or a business rule violation the client can correct."""


class NotFound(DomainError):
    """A referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class Conflict(DomainError):
    """Duplicate unique key or a forbidden state transition."""

    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


INTERNAL_ERROR_DETAIL = "Internal server error."


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Translate any exception raised by a view into the standard error body."""
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else None

    if isinstance(exc, DomainError):
        logger.info(
            "api.domain_error",
            view=view_name,
            code=exc.code,
            status_code=exc.status_code,
        )
        return Response(
            _error_body(exc.status_code, [_error(exc.code, str(exc))]),
            status=exc.status_code,
        )

    if isinstance(exc, PydanticValidationError):
        errors = _pydantic_errors(exc)
        logger.info("api.dto_validation_failed", view=view_name, error_count=len(errors))
        return Response(
            _error_body(status.HTTP_400_BAD_REQUEST, errors),
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = drf_exception_handler(exc, context)
    if response is not None:
        response.data = _error_body(response.status_code, _drf_errors(exc, response))
        return response

    set_rollback()
    logger.exception("api.unhandled_error", view=view_name, error_type=type(exc).__name__)
    return Response(
        _error_body(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            [_error("internal", INTERNAL_ERROR_DETAIL)],
        ),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _error(code: str, detail: str, attr: Optional[str] = None) -> Dict[str, Any]:
    return {"code": code, "detail": detail, "attr": attr}


def _error_body(status_code: int, errors: List[Dict[str, Any]]) -> Dict[str, Any]:
    if status_code >= 500:
        error_type = "server_error"
    elif any(err["attr"] is not None for err in errors):
        error_type = "validation_error"
    else:
        error_type = "client_error"
    return {"type": error_type, "errors": errors}


def _pydantic_errors(exc: PydanticValidationError) -> List[Dict[str, Any]]:
    errors = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        cause = (err.get("ctx") or {}).get("error")
        detail = str(cause) if cause is not None else err["msg"]
        errors.append(_error(InvalidRequest.code, detail, loc or None))
    return errors


def _drf_errors(exc: Exception, response: Response) -> List[Dict[str, Any]]:
    if isinstance(exc, ValidationError):
        return _flatten_validation(exc.get_full_details())
    codes = getattr(exc, "get_codes", lambda: "error")()
    detail = response.data.get("detail", "") if isinstance(response.data, dict) else ""
    return [_error(str(codes), str(detail))]


def _flatten_validation(details: Any, prefix: Optional[str] = None) -> List[Dict[str, Any]]:
    """Flatten DRF's nested ``{"field": [{"message", "code"}]}`` structure.

    Nested serializer errors become dotted attributes, e.g.
    ``items.0.quantity``.
    """
    if isinstance(details, dict) and "message" in details and "code" in details:
        return [_error(details["code"], str(details["message"]), prefix)]
    if isinstance(details, dict):
        errors: List[Dict[str, Any]] = []
        for key, value in details.items():
            attr = None if key == "non_field_errors" else key
            if prefix is not None:
                attr = f"{prefix}.{key}" if attr is not None else prefix
            errors.extend(_flatten_validation(value, attr))
        return errors
    if isinstance(details, list):
        errors = []
        for index, value in enumerate(details):
            nested = isinstance(value, (dict, list)) and not (
                isinstance(value, dict) and "message" in value
            )
            attr = prefix
            if nested and isinstance(value, dict):
                attr = f"{prefix}.{index}" if prefix is not None else str(index)
            errors.extend(_flatten_validation(value, attr))
        return errors
    return [_error("invalid", str(details), prefix)]
