from prometheus_client import Counter, Histogram

# HTTP
translation_requests_total = Counter(
    "translation_requests_total", "translate-ingredient requests by response status", ["status"]
)

# Resolver
translations_total = Counter(
    "translations_total", "Translations returned, by lookup stage", ["source"]
)
translation_cache_write_errors_total = Counter(
    "translation_cache_write_errors_total", "Cache inserts that failed and were skipped"
)
translation_cache_lookup_seconds = Histogram(
    "translation_cache_lookup_seconds", "Latency of cache point lookups"
)
