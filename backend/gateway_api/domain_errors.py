"""Gateway exception hierarchy with stable machine-readable codes."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(eq=False)
class GatewayError(Exception):
    """Operation-level error carrying the HTTP status reported to the client."""

    message: str
    http_status: int = 500
    code: str = "INTERNAL_ERROR"
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class ServerError(GatewayError):
    """The gateway itself failed."""


@dataclass(eq=False)
class UpstreamError(ServerError):
    """A remote desktop host or proxy daemon could not be reached."""

    http_status: int = 502
    code: str = "UPSTREAM_ERROR"


@dataclass(eq=False)
class ClientError(GatewayError):
    """The request was malformed or cannot be satisfied as issued."""

    http_status: int = 400
    code: str = "BAD_REQUEST"


@dataclass(eq=False)
class ResourceNotFoundError(ClientError):
    http_status: int = 404
    code: str = "NOT_FOUND"


@dataclass(eq=False)
class ResourceConflictError(ClientError):
    http_status: int = 409
    code: str = "CONFLICT"


@dataclass(eq=False)
class SecurityError(ClientError):
    """The caller is authenticated but not permitted to do this."""

    http_status: int = 403
    code: str = "PERMISSION_DENIED"


@dataclass(eq=False)
class UnauthorizedError(SecurityError):
    """Credentials are invalid, expired or absent.

    Raising this (or a subclass) tears down the caller's session before the
    error response is sent.
    """

    http_status: int = 401
    code: str = "UNAUTHORIZED"


@dataclass(eq=False)
class CredentialsError(UnauthorizedError):
    """Unauthorized, with the credential fields the client should supply."""

    http_status: int = 403
    code: str = "INVALID_CREDENTIALS"
    expected_fields: list[str] = field(default_factory=list)


@dataclass(eq=False)
class InvalidCredentialsError(CredentialsError):
    pass


@dataclass(eq=False)
class InsufficientCredentialsError(CredentialsError):
    code: str = "INSUFFICIENT_CREDENTIALS"
