from datetime import datetime, timezone

import httpx

from api import config
from api.modules.translate.errors import CacheStoreError


class RestTranslationCache:
    """Translation cache over a PostgREST (Supabase) table endpoint.

    The caller's ``Authorization`` header is forwarded as-is so row-level
    security applies to the end user; without one the anon key is used as
    the bearer.
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str, api_key: str,
                 authorization: str | None = None, table: str = config.CACHE_TABLE):
        self.client = client
        self.base_url = (base_url or "").rstrip("/")
        self.table = table
        self.headers = {
            "apikey": api_key,
            "Authorization": authorization or f"Bearer {api_key}",
        }

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    def _check_configured(self):
        if not self.base_url:
            raise CacheStoreError("SUPABASE_URL is not configured")

    async def get(self, english_term: str) -> str | None:
        self._check_configured()
        params = {
            "select": "chinese_term",
            "english_term": f"eq.{english_term}",
            "limit": "1",
        }
        try:
            r = await self.client.get(self.endpoint, params=params, headers=self.headers)
            r.raise_for_status()
            rows = r.json()
        except (httpx.HTTPError, ValueError) as ex:
            raise CacheStoreError(f"cache lookup failed: {ex}") from ex
        if not rows:
            return None
        return rows[0].get("chinese_term")

    async def insert(self, english_term: str, chinese_term: str) -> None:
        self._check_configured()
        row = {
            "english_term": english_term,
            "chinese_term": chinese_term,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            r = await self.client.post(
                self.endpoint,
                json=row,
                headers={**self.headers, "Prefer": "return=minimal"},
            )
            r.raise_for_status()
        except httpx.HTTPError as ex:
            raise CacheStoreError(f"cache insert failed: {ex}") from ex
