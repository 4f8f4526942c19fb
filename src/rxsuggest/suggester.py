# rxsuggest/suggester.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Set, Union

from . import config as CFG
from .cache import SuggestionCache, make_cache
from .lookup import RemoteLookup
from .models import CandidateName, Query, Source, SuggestionResult
from .normalize import format_drug_name
from .ranking import is_actionable, merge, rank_local

log = logging.getLogger(__name__)

Listener = Callable[[SuggestionResult], None]


# ------------- states -------------

@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class PendingDebounce:
    query: Query
    timer: asyncio.TimerHandle


@dataclass(frozen=True)
class Lookup:
    query: Query
    task: "asyncio.Task[None]"


State = Union[Idle, PendingDebounce, Lookup]


# ------------- remote stage -------------

async def resolve_remote(query: Query, lookup: RemoteLookup, cache: SuggestionCache) -> List[str]:
    """
    Ask the remote service for names starting with the raw query text.
    Success: title-case the terms and cache them under the normalized query.
    Failure: log and return [] without caching, so the next attempt retries.
    """
    try:
        terms = await lookup(query.raw)
    except Exception as e:
        log.warning("Remote lookup failed for %r: %r", query.raw, e)
        return []
    names = [n for n in (format_drug_name(t) for t in terms or []) if n]
    cache.set(query.normalized, names)
    log.debug("Cached %d remote names for %r", len(names), query.normalized)
    return names


class DrugNameSuggester:
    """
    Debounced drug-name suggestions for one search input.

    Every update() publishes the ranked local matches at once (loading=True).
    After `debounce_ms` without another update, one remote lookup runs (or the
    cache answers) and the merged list is published with loading=False.
    A result is only published while the query that produced it is still the
    current one; late answers for superseded queries are dropped.

    Runs on a single asyncio event loop; update()/select() must be called
    from that loop's thread.
    """

    # ------------- lifecycle -------------

    def __init__(
        self,
        names: Iterable[str],
        lookup: RemoteLookup,
        *,
        cache: Optional[SuggestionCache] = None,
        debounce_ms: int = CFG.DEBOUNCE_MS,
        listener: Optional[Listener] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        if debounce_ms < 0:
            raise ValueError("debounce_ms must be >= 0")
        self._names = tuple(names)
        self._lookup = lookup
        self.cache: SuggestionCache = cache if cache is not None else make_cache(CFG.CACHE_MAX_ENTRIES)
        self.debounce_ms = debounce_ms
        self._listener = listener
        self._loop = loop

        self.state: State = Idle()
        self._query = Query.of("")
        self._local: List[str] = []
        self._result = SuggestionResult.empty()
        self._generation = 0
        self._tasks: Set["asyncio.Task[None]"] = set()
        self._settled = asyncio.Event()
        self._settled.set()
        self._closed = False

    @property
    def result(self) -> SuggestionResult:
        """Most recently published result."""
        return self._result

    @property
    def query(self) -> Query:
        return self._query

    # ------------- events -------------

    def update(self, text: str) -> SuggestionResult:
        """NewQuery: a keystroke changed the input text."""
        self._ensure_open()
        query = Query.of(text)
        actionable = is_actionable(query)
        # resolve before touching state so a missing loop leaves everything as it was
        loop = (self._loop or asyncio.get_running_loop()) if actionable else None

        self._cancel_timer()
        self._generation += 1
        self._query = query

        if not actionable:
            self._local = []
            self.state = Idle()
            self._settled.set()
            self._publish(SuggestionResult.empty(query))
            return self._result

        self._local = rank_local(query, self._names, CFG.LOCAL_LIMIT)
        timer = loop.call_later(self.debounce_ms / 1000.0, self._on_debounce, self._generation)
        self.state = PendingDebounce(query, timer)
        self._settled.clear()
        log.debug("PendingDebounce %r (%d local)", query.raw, len(self._local))

        local = tuple(CandidateName(n, Source.LOCAL) for n in self._local)
        self._publish(SuggestionResult(query, local, loading=True))
        return self._result

    def select(self, name: str) -> str:
        """A suggestion was picked: drop pending work and clear the list."""
        self._ensure_open()
        self._cancel_timer()
        self._generation += 1
        self._query = Query.of("")
        self._local = []
        self.state = Idle()
        self._settled.set()
        self._publish(SuggestionResult.empty(self._query))
        log.debug("Selected %r", name)
        return name

    def _on_debounce(self, generation: int) -> None:
        """DebounceFired: cache answers synchronously, otherwise start the lookup."""
        if generation != self._generation:
            return
        query = self._query
        cached = self.cache.get(query.normalized)
        if cached is not None:
            log.debug("Cache hit for %r", query.normalized)
            self._finish(query, cached)
            return

        log.debug("Cache miss for %r; looking up", query.normalized)
        loop = self._loop or asyncio.get_running_loop()
        task = loop.create_task(self._run_lookup(query, list(self._local), generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self.state = Lookup(query, task)

    async def _run_lookup(self, query: Query, local: List[str], generation: int) -> None:
        """LookupCompleted: publish only if this query is still current."""
        remote = await resolve_remote(query, self._lookup, self.cache)
        if generation != self._generation:
            log.debug("Discarding stale lookup for %r", query.raw)
            return
        self._finish(query, remote, local)

    def _finish(self, query: Query, remote: List[str], local: Optional[List[str]] = None) -> None:
        local = self._local if local is None else local
        self.state = Idle()
        try:
            self._publish(SuggestionResult(query, merge(query, local, remote, CFG.MERGED_LIMIT), loading=False))
        finally:
            self._settled.set()

    # ------------- helpers -------------

    def _publish(self, result: SuggestionResult) -> None:
        self._result = result
        if self._listener is not None:
            self._listener(result)

    def _cancel_timer(self) -> None:
        if isinstance(self.state, PendingDebounce):
            self.state.timer.cancel()
            self.state = Idle()

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Suggester is closed")

    async def wait_idle(self) -> SuggestionResult:
        """Wait until the current query is settled and no lookup is in flight."""
        await self._settled.wait()
        if self._tasks:
            await asyncio.gather(*list(self._tasks))
        return self._result

    def close(self) -> None:
        """Cancel the pending timer; in-flight lookups finish but publish nothing."""
        if self._closed:
            return
        self._cancel_timer()
        self._generation += 1
        self._closed = True
        self.state = Idle()
        self._settled.set()

    async def aclose(self) -> None:
        self.close()
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
