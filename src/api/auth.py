"""
Authenticated-user resolution.

Authentication itself happens upstream: the gateway in front of this
service validates the session and forwards the user id in a header
(``settings.auth_header``, ``X-User-Id`` by default).  This module only
turns that header into a ``User`` and rejects anything it cannot resolve.
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from src.api.dependencies import get_store
from src.domain.entities import User


class AuthError(HTTPException):
    """401 with a consistent body."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


async def resolve_user(store, raw_user_id: Optional[str]) -> Optional[User]:
    """Look up the user named by a raw header value; ``None`` if unusable."""
    if not raw_user_id:
        return None
    try:
        user_id = int(raw_user_id)
    except ValueError:
        return None
    return await store.users.get_by_id(user_id)


async def get_current_user(request: Request, store=Depends(get_store)) -> User:
    header = request.app.state.settings.auth_header
    raw = request.headers.get(header)
    if not raw:
        raise AuthError(f"Missing {header} header")
    user = await resolve_user(store, raw)
    if user is None:
        raise AuthError("Unknown or malformed user id")
    return user
