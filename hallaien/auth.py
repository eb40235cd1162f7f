"""
Authentication and authorization for Hallaien.

Tokens are issued by the external identity provider. This module only
verifies them and loads the caller's role from their profile.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

import jwt
from fastapi import Cookie, Depends, Header

from hallaien import config
from hallaien.errors import NotAuthenticated, NotTeacher
from hallaien.models.user import Principal
from hallaien.repos.profile_repo import ProfileRepo

profile_repo = ProfileRepo()


def decode_jwt(token: str) -> dict:
    """
    Decode and verify an identity provider JWT.

    Args:
        token: JWT string to decode

    Returns:
        Decoded payload

    Raises:
        NotAuthenticated: If token is invalid or expired
    """
    audience = config.settings.JWT_AUDIENCE or None
    try:
        return jwt.decode(
            token,
            config.settings.JWT_SECRET,
            algorithms=[config.settings.JWT_ALGORITHM],
            audience=audience,
            options={"verify_aud": audience is not None},
        )
    except jwt.ExpiredSignatureError as e:
        raise NotAuthenticated("Session expired. Please sign in again.") from e
    except jwt.InvalidTokenError as e:
        raise NotAuthenticated("Invalid session token. Please sign in again.") from e


async def get_principal_from_token(token: str) -> Principal:
    """
    Resolve a verified token to the caller's profile.

    Raises:
        NotAuthenticated: If the token is invalid or no profile exists
    """
    payload = decode_jwt(token)
    try:
        profile_id = UUID(payload.get("sub") or "")
    except ValueError as e:
        raise NotAuthenticated("Invalid session token. Please sign in again.") from e

    principal = await profile_repo.get(profile_id)
    if not principal:
        raise NotAuthenticated("Profile not found. Please sign in again.")
    return principal


async def get_current_principal(
    session: Annotated[str | None, Cookie()] = None,
    authorization: Annotated[str | None, Header()] = None,
) -> Principal:
    """
    FastAPI dependency to get the current authenticated principal.

    Tries the Bearer header first, then the session cookie.
    """
    if authorization and authorization.startswith("Bearer "):
        return await get_principal_from_token(authorization.removeprefix("Bearer "))

    if session:
        return await get_principal_from_token(session)

    raise NotAuthenticated()


async def require_teacher(principal: Principal = Depends(get_current_principal)) -> Principal:
    """FastAPI dependency for teacher-only routes. Admins pass too."""
    if not principal.can_manage_assistants:
        raise NotTeacher()
    return principal
