"""FastAPI dependencies for authentication."""

from typing import Optional

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from database.crud import UserCRUD
from database.database import get_db
from database.models import User

from .jwt import verify_token

# HTTP Bearer scheme for JWT tokens (auto_error=False allows fallback to the cookie)
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    access_token: Optional[str] = Cookie(None),
    db: Session = Depends(get_db),
) -> User:
    """
    Get the current user from a JWT token.

    Priority:
    1. JWT Bearer token in Authorization header
    2. access_token cookie set by the social login callback

    Raises:
        HTTPException: If not authenticated or the account is blocked
    """
    token = credentials.credentials if credentials else access_token
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated. Provide Bearer token or log in.",
        )

    token_data = verify_token(token)
    user = UserCRUD.get_user_by_id(db, int(token_data.user_id))
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    if user.is_blocked:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is blocked",
        )
    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    access_token: Optional[str] = Cookie(None),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """
    Get current user if authenticated, None otherwise.

    Use this for endpoints that work with or without authentication.
    """
    try:
        return await get_current_user(credentials, access_token, db)
    except HTTPException:
        return None
