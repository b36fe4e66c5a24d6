from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

USER_STATUS_ACTIVE = "active"
USER_STATUS_BLOCKED = "blocked"


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint('oauth_provider', 'oauth_id', name='uq_users_oauth'),
    )

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=True, index=True)  # WeChat never shares one
    name = Column(String(255), nullable=True)
    picture_url = Column(String(1024), nullable=True)
    oauth_provider = Column(String(50), nullable=True)
    oauth_id = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default=USER_STATUS_ACTIVE)
    created_at = Column(DateTime, default=func.now())
    last_login_at = Column(DateTime, nullable=True)

    @property
    def is_blocked(self) -> bool:
        return self.status == USER_STATUS_BLOCKED

    def to_dict(self) -> dict:
        """Convert User model to dictionary for JSON serialization"""
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "picture_url": self.picture_url,
            "oauth_provider": self.oauth_provider,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "last_login_at": self.last_login_at.isoformat() if self.last_login_at else None,
        }
