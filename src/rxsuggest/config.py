from __future__ import annotations
import os

def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)

def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)

# Queries shorter than this (after normalization) are a no-op
MIN_QUERY_LENGTH: int = 2

# Quiet period before the remote lookup fires
DEBOUNCE_MS: int = _env_int("RXSUGGEST_DEBOUNCE_MS", 300)

# Result caps: local-only phase, then merged local+remote
LOCAL_LIMIT: int = 5
MERGED_LIMIT: int = 10

# /* ~~~ openFDA "term count" endpoint used for brand-name prefix lookups ~~~ */
OPENFDA_LABEL_URL: str = os.environ.get(
    "RXSUGGEST_OPENFDA_URL", "https://api.fda.gov/drug/label.json"
)
OPENFDA_COUNT_FIELD: str = "openfda.brand_name.exact"
OPENFDA_SEARCH_FIELD: str = "openfda.brand_name"
OPENFDA_API_KEY: str | None = os.environ.get("RXSUGGEST_OPENFDA_API_KEY") or None
REMOTE_LIMIT: int = 10
HTTP_TIMEOUT_S: float = _env_float("RXSUGGEST_HTTP_TIMEOUT_S", 5.0)

# /* ~~~ 0 = unbounded session cache (no eviction) ~~~ */
CACHE_MAX_ENTRIES: int = _env_int("RXSUGGEST_CACHE_MAX_ENTRIES", 0)

# Default for Engine.build(verbose=...); set RXSUGGEST_VERBOSE=1 to enable INFO logging
VERBOSE: bool = os.environ.get("RXSUGGEST_VERBOSE") == "1"
