"""Minimal auth dependency.

Extracts the user id from a bearer token or uses a development default.
"""

import uuid
from typing import Annotated

from fastapi import Header, HTTPException, status

from wanderai.db.context import RequestContext

DEFAULT_USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")


async def get_current_context(
    authorization: Annotated[str | None, Header()] = None,
) -> RequestContext:
    """Extract request context from authorization header.

    Either:
    - Parses a "Bearer <user_id>" header
    - Returns the development user if no header

    Args:
        authorization: Authorization header (e.g., "Bearer <token>")

    Returns:
        RequestContext with user_id

    Raises:
        HTTPException: If authorization is invalid
    """
    if not authorization:
        return RequestContext(user_id=DEFAULT_USER_ID)

    if not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization[7:]  # Strip "Bearer "

    try:
        return RequestContext(user_id=uuid.UUID(token))
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token format (expected user_id)",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
