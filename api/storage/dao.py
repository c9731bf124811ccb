from datetime import datetime, timezone

import asyncpg

from api import config
from api.modules.translate.errors import CacheStoreError
from .pg import execute, fetchrow


class PgTranslationCache:
    """Translation cache backed by the asyncpg pool in ``pg``."""

    def __init__(self, table: str = config.CACHE_TABLE):
        self.table = table

    async def get(self, english_term: str) -> str | None:
        # duplicate rows from concurrent inserts are possible; any one will do
        try:
            row = await fetchrow(
                f"SELECT chinese_term FROM {self.table} WHERE english_term=$1 LIMIT 1",
                english_term,
            )
        except (asyncpg.PostgresError, OSError) as ex:
            raise CacheStoreError(f"cache lookup failed: {ex}") from ex
        return row["chinese_term"] if row else None

    async def insert(self, english_term: str, chinese_term: str) -> None:
        try:
            await execute(
                f"INSERT INTO {self.table} (english_term, chinese_term, created_at) VALUES ($1, $2, $3)",
                english_term, chinese_term, datetime.now(timezone.utc),
            )
        except (asyncpg.PostgresError, OSError) as ex:
            raise CacheStoreError(f"cache insert failed: {ex}") from ex
