"""
Central configuration for the social login backend.

All settings loaded from .env file or environment variables.
See .env.example for available options.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from backend directory
load_dotenv(Path(__file__).parent / ".env")


def _get_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _get_list(name: str, default: str = "") -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# JWT secret (required)
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
if not JWT_SECRET_KEY:
    raise ValueError("JWT_SECRET_KEY environment variable is required. See .env.example")

JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("JWT_ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
JWT_REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("JWT_REFRESH_TOKEN_EXPIRE_DAYS", "30"))

# Signs the session cookie holding OAuth state and flash messages
SESSION_SECRET_KEY = os.getenv("SESSION_SECRET_KEY") or JWT_SECRET_KEY
COOKIE_SECURE = _get_bool("COOKIE_SECURE")

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./social_auth.db")
SQL_ECHO = _get_bool("SQL_ECHO")

# WeChat Open Platform application
WECHAT_APP_ID = os.getenv("WECHAT_APP_ID", "").strip()
WECHAT_APP_SECRET = os.getenv("WECHAT_APP_SECRET", "").strip()
WECHAT_REDIRECT_URI = os.getenv(
    "WECHAT_REDIRECT_URI", "http://localhost:8000/user/login/wechat/callback"
)
# Website apps registered for QR login need "snsapi_login" here
WECHAT_SCOPES = _get_list("WECHAT_SCOPES", "email,profile")
WECHAT_LANG = os.getenv("WECHAT_LANG", "en")
WECHAT_AUTHORIZE_URL = os.getenv(
    "WECHAT_AUTHORIZE_URL", "https://open.weixin.qq.com/connect/qrconnect"
)
WECHAT_TOKEN_URL = os.getenv(
    "WECHAT_TOKEN_URL", "https://api.weixin.qq.com/sns/oauth2/access_token"
)
WECHAT_USERINFO_URL = os.getenv(
    "WECHAT_USERINFO_URL", "https://api.weixin.qq.com/sns/userinfo"
)

# Outbound HTTP timeout in seconds
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))

# Where users land after a failed or successful login
LOGIN_URL = os.getenv("LOGIN_URL", "/user/login")
LOGIN_SUCCESS_URL = os.getenv("LOGIN_SUCCESS_URL", "/")

# Whether first-time social logins may create accounts
ALLOW_REGISTRATION = _get_bool("ALLOW_REGISTRATION", "true")

# Frontend origins allowed by CORS
CORS_ORIGINS = _get_list("CORS_ORIGINS", "*")
