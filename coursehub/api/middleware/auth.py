"""Viewer identity resolved from request headers.

Sign-in itself is handled by the identity provider in front of this API;
it forwards the authenticated user as ``X-User-*`` headers.
"""

from fastapi import Header, HTTPException, status

from coursehub.domain.entities import Viewer


async def get_current_user(
    x_user_id: str | None = Header(default=None),
    x_user_name: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
) -> Viewer:
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return Viewer(
        id=x_user_id.strip(),
        full_name=(x_user_name or "").strip() or "Anonymous",
        email=(x_user_email or "").strip(),
    )
