"""WeChat Open Platform OAuth provider (website QR login)."""

from typing import Iterable, Optional
from urllib.parse import urlencode

import httpx

from config import (
    HTTP_TIMEOUT,
    WECHAT_APP_ID,
    WECHAT_APP_SECRET,
    WECHAT_AUTHORIZE_URL,
    WECHAT_LANG,
    WECHAT_REDIRECT_URI,
    WECHAT_TOKEN_URL,
    WECHAT_USERINFO_URL,
)
from .base import OAuthError, OAuthProvider, OAuthUserInfo


class WeChatProvider(OAuthProvider):
    """
    WeChat OAuth 2.0 provider.

    WeChat deviates from plain OAuth 2.0 in a few ways:
    - the client is identified by ``appid``/``secret`` instead of client_id
    - scopes are comma separated and the URL needs a ``#wechat_redirect`` fragment
    - errors come back as HTTP 200 with ``errcode``/``errmsg`` in the body
    - the token response carries the ``openid`` needed to read the profile
    """

    AUTHORIZE_URL = WECHAT_AUTHORIZE_URL
    TOKEN_URL = WECHAT_TOKEN_URL
    USER_URL = WECHAT_USERINFO_URL

    def __init__(
        self,
        app_id: str = WECHAT_APP_ID,
        app_secret: str = WECHAT_APP_SECRET,
        redirect_uri: str = WECHAT_REDIRECT_URI,
        scopes: Optional[Iterable[str]] = None,
        lang: str = WECHAT_LANG,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(scopes)
        self.app_id = app_id
        self.app_secret = app_secret
        self.redirect_uri = redirect_uri
        self.lang = lang
        self._http_client = http_client

    @property
    def name(self) -> str:
        return "wechat"

    def get_authorization_url(self, state: str, **kwargs) -> str:
        """Generate WeChat authorization URL."""
        params = {
            "appid": self.app_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": ",".join(self.scopes),
            "state": state,
        }
        return f"{self.AUTHORIZE_URL}?{urlencode(params)}#wechat_redirect"

    async def _get_json(self, url: str, params: dict) -> dict:
        client = self._http_client or httpx.AsyncClient(timeout=HTTP_TIMEOUT)
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
            # WeChat answers with text/plain, so never trust the content type
            data = response.json()
        finally:
            if self._http_client is None:
                await client.aclose()

        errcode = data.get("errcode")
        if errcode not in (None, 0, "0"):
            raise OAuthError(data.get("errmsg") or "WeChat API error", code=str(errcode))
        return data

    async def exchange_code(self, code: str) -> dict:
        """Exchange authorization code for access token and openid."""
        data = await self._get_json(
            self.TOKEN_URL,
            {
                "appid": self.app_id,
                "secret": self.app_secret,
                "code": code,
                "grant_type": "authorization_code",
            },
        )
        if not data.get("access_token") or not data.get("openid"):
            raise OAuthError("WeChat token response is missing access_token or openid")
        return data

    async def get_user_info(self, token: dict) -> Optional[OAuthUserInfo]:
        """Fetch WeChat user info."""
        data = await self._get_json(
            self.USER_URL,
            {
                "access_token": token["access_token"],
                "openid": token["openid"],
                "lang": self.lang,
            },
        )

        # unionid is stable across every app of the same WeChat developer account
        user_id = data.get("unionid") or data.get("openid") or token["openid"]

        return OAuthUserInfo(
            provider="wechat",
            provider_user_id=str(user_id),
            email=None,
            name=data.get("nickname") or None,
            avatar_url=data.get("headimgurl") or None,
        )
