"""
Remote prefix lookup clients.

The suggester only depends on the contract: an awaitable taking a prefix
string and returning a list of raw term strings, or raising. The default
client queries the openFDA drug label "count" endpoint for brand names
starting with the prefix.
Authority: U.S. Food and Drug Administration (FDA)
Rate limit: 40 requests/minute without API key, 240/min with key.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol

import httpx

from . import config as CFG
from .normalize import normalize_query

logger = logging.getLogger(__name__)


class RemoteLookupError(RuntimeError):
    """Network failure, non-2xx response or malformed payload."""


class RemoteLookup(Protocol):
    async def __call__(self, prefix: str) -> List[str]: ...


def _escape_term(prefix: str) -> str:
    # openFDA query syntax: quotes delimit the phrase, backslash escapes
    return prefix.replace("\\", "\\\\").replace('"', '\\"')


def _parse_terms(payload: Any) -> List[str]:
    if not isinstance(payload, dict):
        raise RemoteLookupError("openFDA payload is not an object")
    results = payload.get("results", [])
    if not isinstance(results, list):
        raise RemoteLookupError("openFDA 'results' is not a list")
    terms: List[str] = []
    for row in results:
        term = row.get("term") if isinstance(row, dict) else None
        if isinstance(term, str) and term.strip():
            terms.append(term)
    return terms


class OpenFDALookup:
    """Brand-name prefix search against openFDA's term-count endpoint."""

    def __init__(
        self,
        *,
        url: str = CFG.OPENFDA_LABEL_URL,
        limit: int = CFG.REMOTE_LIMIT,
        timeout_s: float = CFG.HTTP_TIMEOUT_S,
        api_key: Optional[str] = CFG.OPENFDA_API_KEY,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self.limit = limit
        self.timeout_s = timeout_s
        self.api_key = api_key
        self._transport = transport

    def params(self, prefix: str) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "count": CFG.OPENFDA_COUNT_FIELD,
            "limit": self.limit,
            "search": f'{CFG.OPENFDA_SEARCH_FIELD}:"{_escape_term(prefix.strip())}*"',
        }
        if self.api_key:
            params["api_key"] = self.api_key
        return params

    async def __call__(self, prefix: str) -> List[str]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                r = await client.get(self.url, params=self.params(prefix))
        except httpx.HTTPError as e:
            raise RemoteLookupError(f"openFDA request failed: {e!r}") from e

        # openFDA answers 404 when the search matches nothing
        if r.status_code == 404:
            return []
        if r.status_code < 200 or r.status_code >= 300:
            raise RemoteLookupError(f"openFDA HTTP {r.status_code}")
        try:
            payload = r.json()
        except ValueError as e:
            raise RemoteLookupError("openFDA returned invalid JSON") from e

        terms = _parse_terms(payload)
        logger.debug("openFDA prefix=%r -> %d terms", prefix, len(terms))
        return terms[: self.limit]


class StaticLookup:
    """In-memory lookup keyed by normalized prefix (offline demos, tests)."""

    def __init__(self, table: Optional[Mapping[str, List[str]]] = None) -> None:
        self.table = {normalize_query(k): list(v) for k, v in (table or {}).items()}
        self.calls: List[str] = []

    async def __call__(self, prefix: str) -> List[str]:
        self.calls.append(prefix)
        return list(self.table.get(normalize_query(prefix), []))


class NullLookup:
    """Remote layer disabled."""

    async def __call__(self, prefix: str) -> List[str]:
        return []
