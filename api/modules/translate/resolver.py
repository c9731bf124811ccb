"""
Ingredient name resolution.

Lookup order, first hit wins:

1. persistent cache (``database_cache``)
2. exact dictionary key (``common_mapping``)
3. substring match against dictionary keys, either direction (``partial_match``)
4. placeholder marking the term for manual translation (``placeholder``)

Anything not served from the cache is written back to it so the next lookup
for the same normalized term is a cache hit.
"""

from typing import Literal, Mapping, Optional, Protocol

from pydantic import BaseModel

from api.modules.translate.dictionary import COMMON_TRANSLATIONS, normalize_term
from api.modules.translate.errors import MissingInput
from api.utils.logger import setup_logger
from api.utils.metrics import (
    translation_cache_lookup_seconds,
    translation_cache_write_errors_total,
    translations_total,
)

log = setup_logger("translate")

DEFAULT_TARGET_LANGUAGE = "zh"
PLACEHOLDER_TEMPLATE = "[需要翻译: {name}]"

Source = Literal["database_cache", "common_mapping", "partial_match", "placeholder"]


class TranslationResult(BaseModel):
    english_name: str
    chinese_term: str
    cached: bool
    source: Source


class TranslationCache(Protocol):
    async def get(self, english_term: str) -> Optional[str]: ...

    async def insert(self, english_term: str, chinese_term: str) -> None: ...


def make_placeholder(term: str) -> str:
    return PLACEHOLDER_TEMPLATE.format(name=term)


class IngredientResolver:
    """Resolves one ingredient name per call against a cache and a dictionary.

    The dictionary is treated as read-only; the cache is the only state that
    changes, and at most one insert is issued per ``resolve`` call.

    Example:
        >>> resolver = IngredientResolver(cache)
        >>> result = await resolver.resolve("Chicken")
        >>> result.chinese_term, result.source
        ('鸡肉', 'common_mapping')
    """

    def __init__(self, cache: TranslationCache, dictionary: Mapping[str, str] = COMMON_TRANSLATIONS):
        self.cache = cache
        self.dictionary = dictionary

    def lookup_dictionary(self, normalized: str) -> Optional[tuple[str, Source]]:
        """Exact key first, then the first substring match in declaration order."""
        chinese = self.dictionary.get(normalized)
        if chinese:
            return chinese, "common_mapping"
        for english, chinese in self.dictionary.items():
            if english in normalized or normalized in english:
                return chinese, "partial_match"
        return None

    async def resolve(self, ingredient_name, target_language: str = DEFAULT_TARGET_LANGUAGE) -> TranslationResult:
        """Translate ``ingredient_name``.

        Raises:
            MissingInput: the name is absent, blank or not a string
            CacheStoreError: the cache lookup failed (cache insert failures
                are logged and skipped)
        """
        if not isinstance(ingredient_name, str) or not ingredient_name.strip():
            raise MissingInput("ingredient_name")

        normalized = normalize_term(ingredient_name)

        with translation_cache_lookup_seconds.time():
            existing = await self.cache.get(normalized)
        if existing is not None:
            translations_total.labels(source="database_cache").inc()
            log.info({
                "msg": "translation_resolved",
                "term": normalized,
                "source": "database_cache",
                "target_language": target_language,
            })
            return TranslationResult(
                english_name=ingredient_name,
                chinese_term=existing,
                cached=True,
                source="database_cache",
            )

        match = self.lookup_dictionary(normalized)
        if match:
            chinese, source = match
        else:
            chinese, source = make_placeholder(ingredient_name), "placeholder"

        try:
            await self.cache.insert(normalized, chinese)
        except Exception as ex:
            translation_cache_write_errors_total.inc()
            log.error({
                "msg": "translation_cache_write_failed",
                "term": normalized,
                "err": str(ex),
            })

        translations_total.labels(source=source).inc()
        log.info({
            "msg": "translation_resolved",
            "term": normalized,
            "source": source,
            "target_language": target_language,
        })
        return TranslationResult(
            english_name=ingredient_name,
            chinese_term=chinese,
            cached=False,
            source=source,
        )
