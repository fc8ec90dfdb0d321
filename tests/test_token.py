"""Tests for OAuth2 token acquisition against a local aiohttp server."""

import asyncio

import aiohttp
import pytest
from aiohttp import web
from aiohttp import test_utils

from speech_to_text.auth.token import JWT_BEARER_GRANT, TokenAcquirer
from speech_to_text.exceptions import TokenRequestError


def _acquire_from(handler, assertion="header.payload.signature", now=1000.0):
    received = {}

    async def token_endpoint(request):
        received["content_type"] = request.content_type
        received["form"] = dict(await request.post())
        return await handler(request)

    async def _run():
        app = web.Application()
        app.router.add_post("/token", token_endpoint)
        async with test_utils.TestServer(app) as server:
            async with aiohttp.ClientSession() as session:
                acquirer = TokenAcquirer(session, timeout=5)
                return await acquirer.acquire(assertion, str(server.make_url("/token")), now=now)

    return asyncio.run(_run()), received


def test_acquire_posts_jwt_bearer_form():
    async def handler(request):
        return web.json_response({"access_token": "abc", "expires_in": 3599, "token_type": "Bearer"})

    token, received = _acquire_from(handler)

    assert token.token == "abc"
    assert token.expires_at == 1000.0 + 3599
    assert received["content_type"] == "application/x-www-form-urlencoded"
    assert received["form"] == {
        "grant_type": JWT_BEARER_GRANT,
        "assertion": "header.payload.signature",
    }


def test_acquire_defaults_lifetime_without_expires_in():
    async def handler(request):
        return web.json_response({"access_token": "abc"})

    token, _ = _acquire_from(handler, now=50.0)
    assert token.expires_at == 50.0 + 3600


def test_acquire_non_success_status():
    async def handler(request):
        return web.json_response({"error": "invalid_grant"}, status=400)

    with pytest.raises(TokenRequestError, match="HTTP 400") as excinfo:
        _acquire_from(handler)
    assert excinfo.value.status == 400


def test_acquire_missing_access_token():
    async def handler(request):
        return web.json_response({"token_type": "Bearer"})

    with pytest.raises(TokenRequestError, match="no access_token"):
        _acquire_from(handler)


def test_acquire_non_json_body():
    async def handler(request):
        return web.Response(text="<html>oops</html>", content_type="text/html")

    with pytest.raises(TokenRequestError, match="not valid JSON"):
        _acquire_from(handler)


def test_acquire_connection_failure():
    async def _run():
        async with aiohttp.ClientSession() as session:
            acquirer = TokenAcquirer(session, timeout=5)
            await acquirer.acquire("a.b.c", "http://127.0.0.1:1/token")

    with pytest.raises(TokenRequestError, match="failed"):
        asyncio.run(_run())


def test_acquire_keeps_zero_expires_in():
    async def handler(request):
        return web.json_response({"access_token": "abc", "expires_in": 0})

    token, _ = _acquire_from(handler, now=50.0)
    assert token.expires_at == 50.0
