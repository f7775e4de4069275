"""Standardised API error envelope.

Every error response produced by the API has the same shape::

    {
        "type": "client_error" | "validation_error" | "server_error",
        "errors": [{"code": "...", "detail": "...", "attr": "field.path" | None}]
    }

``exception_handler`` rewrites DRF's own errors (validation, parse,
authentication, not found) into that envelope; ``error_response`` is
used by the views to render domain exceptions the same way.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from rest_framework import exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = structlog.get_logger(__name__)

NON_FIELD_KEYS = {"non_field_errors", "__all__"}


def error_response(
    code: str,
    detail: str,
    status_code: int,
    attr: Optional[str] = None,
) -> Response:
    """Build a single-error client response in the standard envelope."""
    return Response(
        {
            "type": "client_error",
            "errors": [{"code": code, "detail": detail, "attr": attr}],
        },
        status=status_code,
    )


def exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """DRF ``EXCEPTION_HANDLER`` producing the standard error envelope.

    Returns ``None`` for exceptions DRF does not handle, so they propagate
    as server errors.
    """
    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.ValidationError):
        error_type = "validation_error"
        errors = _flatten_validation_errors(exc.detail)
    else:
        error_type = "client_error" if response.status_code < 500 else "server_error"
        detail = response.data.get("detail", "") if isinstance(response.data, dict) else ""
        errors = [
            {
                "code": getattr(detail, "code", None) or "error",
                "detail": str(detail),
                "attr": None,
            }
        ]

    logger.info(
        "api.error_response",
        error_type=error_type,
        status_code=response.status_code,
        codes=[error["code"] for error in errors],
    )
    response.data = {"type": error_type, "errors": errors}
    return response


def _flatten_validation_errors(
    detail: Any, attr: Optional[str] = None
) -> List[Dict[str, Any]]:
    errors: List[Dict[str, Any]] = []
    if isinstance(detail, dict):
        for key, value in detail.items():
            child = None if key in NON_FIELD_KEYS else _join(attr, str(key))
            errors.extend(_flatten_validation_errors(value, child or attr))
    elif isinstance(detail, list):
        for index, item in enumerate(detail):
            if isinstance(item, (dict, list)):
                errors.extend(_flatten_validation_errors(item, _join(attr, str(index))))
            else:
                errors.extend(_flatten_validation_errors(item, attr))
    else:
        errors.append(
            {
                "code": getattr(detail, "code", None) or "invalid",
                "detail": str(detail),
                "attr": attr,
            }
        )
    return errors


def _join(prefix: Optional[str], key: str) -> str:
    return f"{prefix}.{key}" if prefix else key
