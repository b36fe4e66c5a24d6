"""Tests for the WeChat OAuth provider."""
import json
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from auth.providers import OAuthError, WeChatProvider


def make_provider(handler, **kwargs):
    """Provider whose HTTP calls are answered by handler."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return WeChatProvider(
        app_id="wx-app",
        app_secret="wx-secret",
        redirect_uri="https://example.com/user/login/wechat/callback",
        http_client=client,
        **kwargs,
    )


def text_json(payload, status_code=200):
    """WeChat serves JSON as text/plain."""
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode(),
        headers={"Content-Type": "text/plain"},
    )


class TestAuthorizationUrl:
    """Tests for get_authorization_url."""

    def test_url_carries_app_and_state(self):
        provider = WeChatProvider(app_id="wx-app", redirect_uri="https://example.com/cb")
        provider.set_scopes(["snsapi_login"])

        url = provider.get_authorization_url("state-123")
        parsed = urlparse(url)
        params = parse_qs(parsed.query)

        assert url.startswith("https://open.weixin.qq.com/connect/qrconnect?")
        assert parsed.fragment == "wechat_redirect"
        assert params["appid"] == ["wx-app"]
        assert params["redirect_uri"] == ["https://example.com/cb"]
        assert params["response_type"] == ["code"]
        assert params["scope"] == ["snsapi_login"]
        assert params["state"] == ["state-123"]

    def test_scopes_are_comma_joined(self):
        provider = WeChatProvider(app_id="wx-app").set_scopes(["email", "profile"])

        params = parse_qs(urlparse(provider.get_authorization_url("s")).query)

        assert params["scope"] == ["email,profile"]
        assert provider.scopes == ["email", "profile"]


class TestExchangeCode:
    """Tests for exchange_code."""

    @pytest.mark.asyncio
    async def test_success(self):
        seen = {}

        def handler(request):
            seen["url"] = request.url
            return text_json({
                "access_token": "ACCESS",
                "expires_in": 7200,
                "refresh_token": "REFRESH",
                "openid": "OPENID",
                "scope": "snsapi_login",
            })

        token = await make_provider(handler).exchange_code("CODE")

        assert token["access_token"] == "ACCESS"
        assert token["openid"] == "OPENID"
        assert seen["url"].path == "/sns/oauth2/access_token"
        assert seen["url"].params["appid"] == "wx-app"
        assert seen["url"].params["secret"] == "wx-secret"
        assert seen["url"].params["code"] == "CODE"
        assert seen["url"].params["grant_type"] == "authorization_code"

    @pytest.mark.asyncio
    async def test_errcode_raises_oauth_error(self):
        def handler(request):
            return text_json({"errcode": 40029, "errmsg": "invalid code"})

        with pytest.raises(OAuthError) as exc_info:
            await make_provider(handler).exchange_code("BAD")

        assert exc_info.value.code == "40029"
        assert "invalid code" in str(exc_info.value)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("errcode", [0, "0"])
    async def test_zero_errcode_is_success(self, errcode):
        def handler(request):
            return text_json({
                "errcode": errcode,
                "errmsg": "ok",
                "access_token": "ACCESS",
                "openid": "OPENID",
            })

        token = await make_provider(handler).exchange_code("CODE")

        assert token["access_token"] == "ACCESS"

    @pytest.mark.asyncio
    async def test_missing_openid_raises(self):
        def handler(request):
            return text_json({"access_token": "ACCESS"})

        with pytest.raises(OAuthError):
            await make_provider(handler).exchange_code("CODE")

    @pytest.mark.asyncio
    async def test_http_error_propagates(self):
        def handler(request):
            return httpx.Response(502)

        with pytest.raises(httpx.HTTPStatusError):
            await make_provider(handler).exchange_code("CODE")


class TestGetUserInfo:
    """Tests for get_user_info."""

    @pytest.mark.asyncio
    async def test_maps_profile_and_prefers_unionid(self):
        seen = {}

        def handler(request):
            seen["url"] = request.url
            return text_json({
                "openid": "OPENID",
                "nickname": "Wei",
                "sex": 1,
                "headimgurl": "https://thirdwx.qlogo.cn/wei.png",
                "privilege": [],
                "unionid": "UNIONID",
            })

        info = await make_provider(handler, lang="zh_CN").get_user_info(
            {"access_token": "ACCESS", "openid": "OPENID"}
        )

        assert info.provider == "wechat"
        assert info.provider_user_id == "UNIONID"
        assert info.name == "Wei"
        assert info.avatar_url == "https://thirdwx.qlogo.cn/wei.png"
        assert info.email is None
        assert seen["url"].path == "/sns/userinfo"
        assert seen["url"].params["access_token"] == "ACCESS"
        assert seen["url"].params["openid"] == "OPENID"
        assert seen["url"].params["lang"] == "zh_CN"

    @pytest.mark.asyncio
    async def test_falls_back_to_openid(self):
        def handler(request):
            return text_json({"openid": "OPENID", "nickname": "", "headimgurl": ""})

        info = await make_provider(handler).get_user_info(
            {"access_token": "ACCESS", "openid": "OPENID"}
        )

        assert info.provider_user_id == "OPENID"
        assert info.name is None
        assert info.avatar_url is None

    @pytest.mark.asyncio
    async def test_expired_token_raises(self):
        def handler(request):
            return text_json({"errcode": 42001, "errmsg": "access_token expired"})

        with pytest.raises(OAuthError) as exc_info:
            await make_provider(handler).get_user_info({"access_token": "OLD", "openid": "O"})

        assert exc_info.value.code == "42001"
