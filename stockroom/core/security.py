"""
Session-based request authentication.
"""
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request

from stockroom.core.config import settings
from stockroom.core.redis_client import session_manager


def get_session_id(request: Request) -> Optional[str]:
    """Read the session id from the session cookie or a bearer token."""
    session_id = request.cookies.get(settings.session_cookie_name)
    if session_id:
        return session_id

    authorization = request.headers.get("Authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return None


async def get_current_user(request: Request) -> Optional[Dict[str, Any]]:
    """
    Resolve the signed-in user for a request.

    Used as a router-level dependency; raises 401 when there is no live
    session. Returns None when authentication is disabled.
    """
    if not settings.auth_enabled:
        return None

    session_id = get_session_id(request)
    if not session_id:
        raise HTTPException(status_code=401, detail="Not authenticated")

    session = session_manager.get_session(session_id)
    if not session:
        raise HTTPException(status_code=401, detail="Session expired or invalid")

    session_manager.extend_session(session_id)
    return session
