"""Tests for the PostgREST-backed translation cache."""

import json

import httpx
import pytest

from api.modules.translate.errors import CacheStoreError
from api.storage.postgrest import RestTranslationCache


def make_cache(handler, authorization=None, base_url="https://proj.supabase.co"):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RestTranslationCache(
        client=client, base_url=base_url, api_key="anon-key", authorization=authorization
    )


class TestGet:
    @pytest.mark.asyncio
    async def test_hit(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[{"chinese_term": "鸡肉"}])

        cache = make_cache(handler, authorization="Bearer user-jwt")
        assert await cache.get("chicken") == "鸡肉"

        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/rest/v1/ingredient_translation_cache"
        assert request.url.params["english_term"] == "eq.chicken"
        assert request.url.params["select"] == "chinese_term"
        assert request.url.params["limit"] == "1"
        assert request.headers["apikey"] == "anon-key"
        assert request.headers["authorization"] == "Bearer user-jwt"

    @pytest.mark.asyncio
    async def test_miss(self):
        cache = make_cache(lambda request: httpx.Response(200, json=[]))
        assert await cache.get("yuzu") is None

    @pytest.mark.asyncio
    async def test_anon_key_used_without_caller_token(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        await make_cache(handler).get("yuzu")
        assert seen[0].headers["authorization"] == "Bearer anon-key"

    @pytest.mark.asyncio
    async def test_server_error_raises(self):
        cache = make_cache(lambda request: httpx.Response(503, json={"message": "down"}))
        with pytest.raises(CacheStoreError):
            await cache.get("chicken")

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(CacheStoreError):
            await make_cache(handler).get("chicken")

    @pytest.mark.asyncio
    async def test_unconfigured_url_raises(self):
        cache = make_cache(lambda request: httpx.Response(200, json=[]), base_url="")
        with pytest.raises(CacheStoreError, match="SUPABASE_URL"):
            await cache.get("chicken")


class TestInsert:
    @pytest.mark.asyncio
    async def test_posts_row(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(201)

        await make_cache(handler, authorization="Bearer user-jwt").insert("chicken", "鸡肉")

        request = seen[0]
        body = json.loads(request.content)
        assert request.method == "POST"
        assert request.headers["prefer"] == "return=minimal"
        assert request.headers["authorization"] == "Bearer user-jwt"
        assert body["english_term"] == "chicken"
        assert body["chinese_term"] == "鸡肉"
        assert body["created_at"].endswith("+00:00")

    @pytest.mark.asyncio
    async def test_rejected_insert_raises(self):
        cache = make_cache(lambda request: httpx.Response(401, json={"message": "JWT expired"}))
        with pytest.raises(CacheStoreError):
            await cache.insert("chicken", "鸡肉")
