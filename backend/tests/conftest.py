import pytest
import sys
import os
from urllib.parse import urlencode

# Settings must exist before config is imported
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("WECHAT_APP_ID", "wx-test-app")
os.environ.setdefault("WECHAT_APP_SECRET", "wx-test-secret")

# Add the parent directory to Python path so we can import backend modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.models import Base
from auth.providers.base import OAuthProvider, OAuthUserInfo


class FakeProvider(OAuthProvider):
    """Provider client that records calls instead of talking to WeChat."""

    def __init__(self, profile=None, error=None):
        super().__init__()
        self.profile = profile
        self.error = error
        self.exchanged_code = None
        self.token_seen = None

    @property
    def name(self) -> str:
        return "wechat"

    def get_authorization_url(self, state: str, **kwargs) -> str:
        params = {"scope": ",".join(self.scopes), "state": state}
        return f"https://provider.test/authorize?{urlencode(params)}"

    async def exchange_code(self, code: str) -> dict:
        if self.error:
            raise self.error
        self.exchanged_code = code
        return {"access_token": "provider-token", "openid": "openid-1"}

    async def get_user_info(self, token: dict):
        self.token_seen = token
        return self.profile


@pytest.fixture
def profile():
    return OAuthUserInfo(
        provider="wechat",
        provider_user_id="union-42",
        email="alice@example.com",
        name="Alice",
        avatar_url="https://img.example.com/alice.png",
    )


@pytest.fixture
def db_session():
    """Create temporary SQLite database for testing"""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = SessionLocal()

    yield session

    session.close()
