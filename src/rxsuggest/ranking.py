from __future__ import annotations
from typing import Iterable, List, Sequence, Tuple

from . import config as CFG
from .models import CandidateName, Query, Source
from .normalize import normalize_query, sort_key

# Filter and rank drug names for a query. Everything here is pure: no timers,
# no network, no cache, so the suggester and the engine share it as-is.


def _as_query(query: Query | str) -> Query:
    return query if isinstance(query, Query) else Query.of(query)


def is_actionable(query: Query | str) -> bool:
    """Short queries are a defined no-op, not an error."""
    return _as_query(query).length >= CFG.MIN_QUERY_LENGTH


def local_matches(query: Query | str, names: Iterable[str]) -> List[str]:
    """Every name whose normalized form contains the normalized query."""
    q = _as_query(query).normalized
    if not q:
        return []
    return [n for n in names if q in normalize_query(n)]


def _tier(name: str, q_norm: str) -> int:
    # 0: starts with the query, 1: merely contains it
    return 0 if normalize_query(name).startswith(q_norm) else 1


def rank_local(query: Query | str, names: Iterable[str], limit: int = CFG.LOCAL_LIMIT) -> List[str]:
    """
    /* ~~~ Starts-with matches first, then contains-only;
       alphabetical (case-insensitive) within a tier; top `limit` ~~~ */
    """
    if limit <= 0:
        raise ValueError("limit must be positive")
    q = _as_query(query)
    if q.length < CFG.MIN_QUERY_LENGTH:
        return []
    hits = local_matches(q, names)
    hits.sort(key=lambda n: (_tier(n, q.normalized), sort_key(n)))
    return hits[:limit]


def merge(
    query: Query | str,
    local: Sequence[str],
    remote: Sequence[str],
    limit: int = CFG.MERGED_LIMIT,
) -> Tuple[CandidateName, ...]:
    """
    Union local and remote names, re-rank, truncate and tag provenance.

    Duplicates collapse on exact (case-sensitive) match, local first.
    Order: starts-with the original query first, then shortest name first;
    remaining ties keep union order (the sort is stable).
    """
    if limit <= 0:
        raise ValueError("limit must be positive")
    q = _as_query(query).normalized

    combined: dict[str, None] = dict.fromkeys(local)
    for name in remote:
        if name:
            combined.setdefault(name, None)

    ranked = sorted(combined, key=lambda n: (_tier(n, q), len(n)))
    local_set = set(local)
    return tuple(
        CandidateName(n, Source.LOCAL if n in local_set else Source.REMOTE)
        for n in ranked[:limit]
    )
