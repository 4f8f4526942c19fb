# rxsuggest/engine.py
from __future__ import annotations

import logging
from typing import Iterable, Optional

from . import config as CFG
from .cache import SuggestionCache, make_cache
from .dictionary import DrugDictionary, load_dictionary
from .lookup import NullLookup, OpenFDALookup, RemoteLookup
from .models import CandidateName, Query, Source, SuggestionResult
from .ranking import is_actionable, merge, rank_local
from .suggester import DrugNameSuggester, Listener, resolve_remote

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - the static drug dictionary (bundled asset or user files),
      - the remote prefix lookup (openFDA by default),
      - the shared suggestion cache,
      - ranking/merging (ranking.rank_local / ranking.merge).

    Public API (used by CLI/Flask):
      * build(paths, ...):     load dictionary -> create cache -> pick lookup
      * local(query):          instant dictionary-only pass
      * suggest(query):        one-shot local+remote suggestions (no debounce)
      * session(listener):     debounced DrugNameSuggester sharing this engine's state
      * shutdown():            drop state
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self.dictionary: Optional[DrugDictionary] = None
        self.cache: Optional[SuggestionCache] = None
        self._lookup: Optional[RemoteLookup] = None

    # /* ~~~ Load the dictionary and wire up cache + remote lookup ~~~ */
    def build(
        self,
        paths: Optional[Iterable[str]] = None,
        *,
        lookup: Optional[RemoteLookup] = None,   # injected client (tests, offline demos)
        remote: bool = True,                     # False -> local dictionary only
        cache_max_entries: Optional[int] = None, # None -> config default; 0 -> unbounded
        verbose: Optional[bool] = None,          # None -> config.VERBOSE (RXSUGGEST_VERBOSE=1)
    ) -> None:
        if verbose is None:
            verbose = CFG.VERBOSE
        if verbose:
            logging.basicConfig(level=logging.INFO)

        paths = list(paths or [])
        log.info("Loading dictionary from %s", paths or "bundled asset")
        self.dictionary = load_dictionary(paths)

        max_entries = CFG.CACHE_MAX_ENTRIES if cache_max_entries is None else cache_max_entries
        self.cache = make_cache(max_entries)

        if lookup is not None:
            self._lookup = lookup
        elif remote:
            self._lookup = OpenFDALookup()
        else:
            self._lookup = NullLookup()

        log.info(
            "Engine build() complete: names=%d cache=%s lookup=%s",
            len(self.dictionary), type(self.cache).__name__, type(self._lookup).__name__,
        )

    # ------------- query -------------

    # /* ~~~ Instant local-only pass; loading=True while a remote pass may follow ~~~ */
    def local(self, query: str) -> SuggestionResult:
        dictionary, _, _ = self._require()
        q = Query.of(query)
        if not is_actionable(q):
            return SuggestionResult.empty(q)
        names = rank_local(q, dictionary, CFG.LOCAL_LIMIT)
        return SuggestionResult(q, tuple(CandidateName(n, Source.LOCAL) for n in names), loading=True)

    # /* ~~~ Local rank, then cache or remote, then merge; the caller debounces ~~~ */
    async def suggest(self, query: str) -> SuggestionResult:
        dictionary, cache, lookup = self._require()
        q = Query.of(query)
        if not is_actionable(q):
            return SuggestionResult.empty(q)

        local = rank_local(q, dictionary, CFG.LOCAL_LIMIT)
        remote = cache.get(q.normalized)
        if remote is None:
            remote = await resolve_remote(q, lookup, cache)
        else:
            log.debug("Cache hit for %r", q.normalized)
        return SuggestionResult(q, merge(q, local, remote, CFG.MERGED_LIMIT), loading=False)

    def session(self, listener: Optional[Listener] = None, *, debounce_ms: Optional[int] = None) -> DrugNameSuggester:
        dictionary, cache, lookup = self._require()
        return DrugNameSuggester(
            dictionary,
            lookup,
            cache=cache,
            debounce_ms=CFG.DEBOUNCE_MS if debounce_ms is None else debounce_ms,
            listener=listener,
        )

    # ------------- teardown -------------

    def shutdown(self) -> None:
        try:
            if self.cache is not None:
                self.cache.clear()
        finally:
            self.cache = None
            self.dictionary = None
            self._lookup = None
            log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _require(self) -> tuple[DrugDictionary, SuggestionCache, RemoteLookup]:
        if self.dictionary is None or self.cache is None or self._lookup is None:
            raise RuntimeError("Engine not initialized. Call build() first.")
        return self.dictionary, self.cache, self._lookup
