"""Typed access to the parameters of the inbound request."""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Protocol

from starlette.requests import Request

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


class RequestContext(Protocol):
    def get_parameters(self) -> Mapping[str, Sequence[str]]:
        ...


def _query_parameters(request: Request) -> dict[str, list[str]]:
    parameters: dict[str, list[str]] = {}
    for name, value in request.query_params.multi_items():
        parameters.setdefault(name, []).append(value)
    return parameters


class StarletteRequestContext:
    """Query-string parameters of a Starlette/FastAPI request.

    Repeated parameters keep every value, in the order they were sent.
    """

    def __init__(self, request: Request):
        self._request = request

    def get_parameters(self) -> dict[str, list[str]]:
        return _query_parameters(self._request)


class MappingRequestContext:
    """Request context over an already-parsed parameter mapping."""

    def __init__(self, parameters: Mapping[str, Sequence[str]] | None = None):
        self._parameters = dict(parameters or {})

    def get_parameters(self) -> Mapping[str, Sequence[str]]:
        return self._parameters


async def read_request_parameters(request: Request) -> MappingRequestContext:
    """Query-string and form parameters, query values first.

    Uploaded files are not parameters and are skipped. A form body that
    cannot be read leaves only the query-string parameters.
    """
    parameters = _query_parameters(request)
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type not in FORM_CONTENT_TYPES:
        return MappingRequestContext(parameters)

    try:
        form = await request.form()
        for name, value in form.multi_items():
            if isinstance(value, str):
                parameters.setdefault(name, []).append(value)
    except Exception:
        logger.exception("Failed to read form parameters (query string only)")

    return MappingRequestContext(parameters)
