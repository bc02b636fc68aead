"""Session status endpoint."""
from fastapi import APIRouter, Depends, Query, Request

from ..domain_errors import UnauthorizedError
from ..sessions import SessionAuthority

router = APIRouter(prefix="/session", tags=["session"])


def get_session_authority(request: Request) -> SessionAuthority:
    return request.app.state.session_authority


@router.get("")
def get_session_status(
    token: str | None = Query(default=None),
    authority: SessionAuthority = Depends(get_session_authority),
):
    """Report whether the session named by ``token`` is still active."""
    if not authority.is_active(token):
        raise UnauthorizedError("Permission Denied.")
    return {"active": True}
