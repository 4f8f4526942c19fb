"""Process-wide engine shared by the CLI and the Flask app."""
from __future__ import annotations
import asyncio
import time
from typing import Optional, Sequence

from rxsuggest.engine import Engine
from rxsuggest.lookup import RemoteLookup
from rxsuggest.models import SuggestionResult

_engine: Engine | None = None

def initialize(paths: Optional[Sequence[str]] = None,
               offline: bool = False,
               cache_max: int | None = None,
               verbose: bool | None = None,
               lookup: RemoteLookup | None = None) -> Engine:
    """
    Build the shared engine.
      paths:   dictionary files/folders (bundled list when empty)
      offline: skip the openFDA layer entirely
    """
    global _engine
    t0 = time.perf_counter()
    if _engine is not None:
        _engine.shutdown()
    eng = Engine()
    eng.build(paths, lookup=lookup, remote=not offline, cache_max_entries=cache_max, verbose=verbose)
    _engine = eng
    if verbose:
        print(f"[ready] init complete in {time.perf_counter() - t0:.2f}s")
    return eng

def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call initialize(...) first.")
    return _engine

def suggest(query: str) -> SuggestionResult:
    """Blocking one-shot suggestions for callers without an event loop."""
    return asyncio.run(get_engine().suggest(query))

def shutdown() -> None:
    global _engine
    if _engine is not None:
        _engine.shutdown()
        _engine = None
