"""JSON error bodies for gateway errors."""
from __future__ import annotations

from http import HTTPStatus
from typing import Any

from fastapi.responses import JSONResponse

from .config import settings
from .domain_errors import CredentialsError, GatewayError


def build_error_body(exc: GatewayError, *, type_base_url: str | None = None) -> dict[str, Any]:
    """Render a GatewayError as a problem-style payload with a stable code."""
    try:
        title = HTTPStatus(exc.http_status).phrase
    except ValueError:
        title = "Gateway Error"

    base_url = (type_base_url or settings.ERROR_TYPE_BASE_URL).rstrip("/")
    payload: dict[str, Any] = {
        "type": f"{base_url}/{exc.code.lower()}",
        "title": title,
        "status": exc.http_status,
        "code": exc.code,
        "message": exc.message,
    }
    if exc.details is not None:
        payload["details"] = exc.details
    if isinstance(exc, CredentialsError):
        payload["expected"] = list(exc.expected_fields)

    return payload


def build_error_response(exc: GatewayError, *, type_base_url: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=build_error_body(exc, type_base_url=type_base_url),
        media_type="application/json",
    )
