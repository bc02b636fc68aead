"""Translation of gateway errors into JSON HTTP responses."""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .domain_errors import GatewayError, UnauthorizedError
from .error_body import build_error_response
from .request_context import RequestContext, StarletteRequestContext, read_request_parameters
from .sessions import SessionAuthority

TOKEN_PARAMETER = "token"


def extract_token(parameters: Mapping[str, Sequence[str]]) -> str | None:
    """Return the first value of the ``token`` parameter, or None if absent or empty."""
    values = parameters.get(TOKEN_PARAMETER)
    if not values:
        return None
    token = values[0]
    return token or None


class ErrorTranslator:
    """Answers every GatewayError with a JSON error body.

    Unauthorized errors also invalidate the session named by the request's
    ``token`` parameter. Invalidation is best-effort: its outcome is only
    logged and never prevents the error response.
    """

    def __init__(
        self,
        session_authority: SessionAuthority,
        logger: logging.Logger | None = None,
        *,
        type_base_url: str | None = None,
    ):
        self._session_authority = session_authority
        self._logger = logger or logging.getLogger(__name__)
        self._type_base_url = type_base_url

    def translate(self, exc: GatewayError, request_context: RequestContext) -> JSONResponse:
        """Invalidate the session for unauthorized errors, then render the error body."""
        if isinstance(exc, UnauthorizedError):
            self._invalidate_session(request_context)
        return build_error_response(exc, type_base_url=self._type_base_url)

    def _invalidate_session(self, request_context: RequestContext) -> None:
        try:
            token = extract_token(request_context.get_parameters())
            if self._session_authority.invalidate(token):
                self._logger.debug('Implicitly invalidated session for token "%s"', token)
        except Exception:
            # The client still gets its error response.
            self._logger.exception("Failed to invalidate session after unauthorized request")

    async def handle(self, request: Request, exc: GatewayError) -> JSONResponse:
        """FastAPI exception handler; form parameters are read only for unauthorized errors."""
        request_context: RequestContext = StarletteRequestContext(request)
        if isinstance(exc, UnauthorizedError):
            request_context = await read_request_parameters(request)
        return self.translate(exc, request_context)

    def register(self, app: FastAPI) -> None:
        """Install this translator as the app's GatewayError handler."""
        app.add_exception_handler(GatewayError, self.handle)
