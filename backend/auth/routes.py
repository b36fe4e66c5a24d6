"""Authentication API routes."""

from typing import Optional

from fastapi import APIRouter, Cookie, Depends, HTTPException, Request, Response, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from config import COOKIE_SECURE
from database.crud import UserCRUD
from database.database import get_db
from database.models import User

from .dependencies import get_current_user
from .jwt import create_token_pair, verify_token

router = APIRouter(prefix="/auth", tags=["auth"])


class UserResponse(BaseModel):
    id: int
    email: str | None
    name: str | None
    picture_url: str | None
    oauth_provider: str | None
    created_at: str | None
    last_login_at: str | None


class RefreshRequest(BaseModel):
    refresh_token: str | None = None


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


@router.get("/me", response_model=UserResponse)
async def read_current_user(user: User = Depends(get_current_user)):
    """Get the logged in user."""
    data = user.to_dict()
    return UserResponse(
        id=data["id"],
        email=data["email"],
        name=data["name"],
        picture_url=data["picture_url"],
        oauth_provider=data["oauth_provider"],
        created_at=data["created_at"],
        last_login_at=data["last_login_at"],
    )


@router.post("/refresh", response_model=TokenResponse)
async def refresh_tokens(
    body: Optional[RefreshRequest] = None,
    refresh_token: Optional[str] = Cookie(None),
    db: Session = Depends(get_db),
):
    """Swap a refresh token (body or cookie) for a new token pair."""
    token = (body.refresh_token if body else None) or refresh_token
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Refresh token required",
        )

    token_data = verify_token(token, expected_type="refresh")
    user = UserCRUD.get_user_by_id(db, int(token_data.user_id))
    if not user or user.is_blocked:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    access, refresh = create_token_pair(user.id, token_data.provider)
    return TokenResponse(access_token=access, refresh_token=refresh)


@router.post("/logout")
async def logout(request: Request, response: Response):
    """Clear the session and the authentication cookies."""
    request.session.clear()
    for key in ("access_token", "refresh_token"):
        response.delete_cookie(
            key=key,
            path="/",
            secure=COOKIE_SECURE,
            httponly=True,
            samesite="lax",
        )
    return {"success": True, "message": "Logged out successfully"}
