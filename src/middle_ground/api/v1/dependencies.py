"""Shared API dependencies for authentication and common functionality."""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from middle_ground.core.security import decode_access_token
from middle_ground.db.session import DEADLINE_KEY, get_db

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer(auto_error=False)


def get_request_session(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> Generator[Session, None, None]:
    """Yield the session bound to the request deadline set by the timeout middleware."""
    deadline = getattr(request.state, "deadline", None)
    if deadline is not None:
        db.info[DEADLINE_KEY] = deadline
    try:
        yield db
    finally:
        db.info.pop(DEADLINE_KEY, None)


# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_request_session)]


def get_current_username(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str:
    """Return the username carried by the bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent

    Returns:
        Username from the token subject

    Raises:
        HTTPException: If the token is missing, malformed or expired
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    username = decode_access_token(credentials.credentials)
    if username is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return username


# Type alias for current user dependency
CurrentUsernameDep = Annotated[str, Depends(get_current_username)]
