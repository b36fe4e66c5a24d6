"""JWT token management for authentication."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import HTTPException, status

from config import (
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
    JWT_ALGORITHM,
    JWT_REFRESH_TOKEN_EXPIRE_DAYS,
    JWT_SECRET_KEY,
)


@dataclass
class TokenData:
    """Decoded JWT token payload."""

    user_id: str
    provider: Optional[str]  # e.g. 'wechat'
    token_type: str  # 'access' or 'refresh'


def _encode(user_id, provider: Optional[str], token_type: str, lifetime: timedelta) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "provider": provider,
        "token_type": token_type,
        "exp": now + lifetime,
        "iat": now,
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def create_access_token(user_id, provider: Optional[str] = None) -> str:
    """
    Create a short-lived access token.

    Args:
        user_id: User identifier
        provider: Social provider the user logged in with

    Returns:
        Encoded JWT access token
    """
    return _encode(
        user_id, provider, "access", timedelta(minutes=JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    )


def create_refresh_token(user_id, provider: Optional[str] = None) -> str:
    """
    Create a long-lived refresh token.

    Args:
        user_id: User identifier
        provider: Social provider the user logged in with

    Returns:
        Encoded JWT refresh token
    """
    return _encode(
        user_id, provider, "refresh", timedelta(days=JWT_REFRESH_TOKEN_EXPIRE_DAYS)
    )


def verify_token(token: str, expected_type: str = "access") -> TokenData:
    """
    Verify and decode a JWT token.

    Args:
        token: JWT token string
        expected_type: Expected token type ('access' or 'refresh')

    Returns:
        TokenData with decoded payload

    Raises:
        HTTPException: If token is invalid or expired
    """
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
        )
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
        )

    token_type = payload.get("token_type")
    if token_type != expected_type:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token type. Expected {expected_type}, got {token_type}",
        )

    return TokenData(
        user_id=payload["sub"],
        provider=payload.get("provider"),
        token_type=token_type,
    )


def create_token_pair(user_id, provider: Optional[str] = None) -> tuple[str, str]:
    """
    Create both access and refresh tokens.

    Returns:
        Tuple of (access_token, refresh_token)
    """
    access_token = create_access_token(user_id, provider)
    refresh_token = create_refresh_token(user_id, provider)
    return access_token, refresh_token
