"""
Drug-name autocomplete.

Blends an instant local filter over a static dictionary of known drug names
with a debounced, cached remote prefix lookup (openFDA brand names). Local
matches are published right away; the merged list follows once typing pauses.

Main entry points:
    Engine: build(paths) / suggest(query) / session(listener) / shutdown()
    DrugNameSuggester: the debounced state machine behind session()
    merge, rank_local: the pure ranking functions

Example Usage:
    import asyncio
    from rxsuggest import Engine

    eng = Engine()
    eng.build()
    result = asyncio.run(eng.suggest("metf"))
    for c in result.suggestions:
        print(c.source.value, c.name)
"""

from .engine import Engine
from .models import CandidateName, Query, Source, SuggestionResult
from .ranking import merge, rank_local
from .suggester import DrugNameSuggester

__version__ = "1.0.0"
__all__ = [
    "Engine",
    "DrugNameSuggester",
    "CandidateName",
    "Query",
    "Source",
    "SuggestionResult",
    "merge",
    "rank_local",
]
