from sqlalchemy import func
from sqlalchemy.orm import Session
from .models import User, USER_STATUS_ACTIVE
from typing import Optional
from datetime import datetime

class UserCRUD:
    """CRUD operations for User model"""

    @staticmethod
    def create_user(db: Session, email: str = None, name: str = None, picture_url: str = None,
                    oauth_provider: str = None, oauth_id: str = None,
                    status: str = USER_STATUS_ACTIVE) -> User:
        """Create a new user"""
        db_user = User(
            email=email or None,
            name=name,
            picture_url=picture_url,
            oauth_provider=oauth_provider,
            oauth_id=oauth_id,
            status=status
        )
        db.add(db_user)
        db.commit()
        db.refresh(db_user)
        return db_user

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        """Get user by ID"""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_oauth(db: Session, provider: str, oauth_id: str) -> Optional[User]:
        """Get user by linked provider identity"""
        return db.query(User).filter(
            User.oauth_provider == provider,
            User.oauth_id == oauth_id
        ).first()

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)"""
        if not email:
            return None
        return db.query(User).filter(func.lower(User.email) == email.lower()).first()

    @staticmethod
    def link_oauth(db: Session, user_id: int, provider: str, oauth_id: str) -> Optional[User]:
        """Attach a provider identity to an existing user"""
        db_user = db.query(User).filter(User.id == user_id).first()
        if db_user:
            db_user.oauth_provider = provider
            db_user.oauth_id = oauth_id
            db.commit()
            db.refresh(db_user)
        return db_user

    @staticmethod
    def update_profile(db: Session, user_id: int, name: str = None,
                       picture_url: str = None) -> Optional[User]:
        """Update profile fields that were provided"""
        db_user = db.query(User).filter(User.id == user_id).first()
        if db_user:
            if name is not None:
                db_user.name = name
            if picture_url is not None:
                db_user.picture_url = picture_url
            db.commit()
            db.refresh(db_user)
        return db_user

    @staticmethod
    def touch_login(db: Session, user_id: int) -> Optional[User]:
        """Record a successful login"""
        db_user = db.query(User).filter(User.id == user_id).first()
        if db_user:
            db_user.last_login_at = datetime.utcnow()
            db.commit()
            db.refresh(db_user)
        return db_user

    @staticmethod
    def set_status(db: Session, user_id: int, status: str) -> Optional[User]:
        """Block or reactivate a user"""
        db_user = db.query(User).filter(User.id == user_id).first()
        if db_user:
            db_user.status = status
            db.commit()
            db.refresh(db_user)
        return db_user
