"""
Helper utilities for translation tests.

Provides FakeCache, an in-memory stand-in for a translation cache store.
"""

from __future__ import annotations

from api.modules.translate.errors import CacheStoreError


class FakeCache:
    """In-memory translation cache.

    Rows are appended like the real table; ``get`` returns the first match.
    """

    def __init__(self, rows=None, fail_get=False, fail_insert=False):
        self.rows: list[tuple[str, str]] = list(rows or [])
        self.fail_get = fail_get
        self.fail_insert = fail_insert
        self.gets: list[str] = []
        self.inserts: list[tuple[str, str]] = []

    async def get(self, english_term):
        self.gets.append(english_term)
        if self.fail_get:
            raise CacheStoreError("lookup unavailable")
        for term, chinese in self.rows:
            if term == english_term:
                return chinese
        return None

    async def insert(self, english_term, chinese_term):
        self.inserts.append((english_term, chinese_term))
        if self.fail_insert:
            raise CacheStoreError("insert rejected")
        self.rows.append((english_term, chinese_term))
