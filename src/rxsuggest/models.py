# src/rxsuggest/models.py
"""
Data models for the drug-name suggester.

- Query: one immutable snapshot of what the user typed.
- CandidateName: a display name plus where it came from.
- SuggestionResult: the externally observable output for one query.

These classes do not contain ranking or network logic; they only structure
the data so that filtering, merging and publishing stay simple.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple

from .normalize import normalize_query


class Source(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"


@dataclass(frozen=True, slots=True)
class Query:
    """
    Attributes
    ----------
    raw : str
        The text exactly as typed. Sent as-is to the remote prefix lookup.
    normalized : str
        Trimmed, lower-cased form used for matching and as the cache key.
    """
    raw: str
    normalized: str

    @classmethod
    def of(cls, text: str | None) -> "Query":
        raw = text or ""
        return cls(raw=raw, normalized=normalize_query(raw))

    @property
    def length(self) -> int:
        return len(self.normalized)


@dataclass(frozen=True, slots=True)
class CandidateName:
    name: str
    source: Source

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "source": self.source.value}


@dataclass(frozen=True, slots=True)
class SuggestionResult:
    """
    One published answer for a query.

    Attributes
    ----------
    query : Query
        The query this result answers.
    suggestions : tuple[CandidateName, ...]
        Ranked candidates, already truncated.
    loading : bool
        True while a remote lookup for this query may still refine the list.
    """
    query: Query
    suggestions: Tuple[CandidateName, ...] = field(default_factory=tuple)
    loading: bool = False

    @classmethod
    def empty(cls, query: Query | None = None) -> "SuggestionResult":
        return cls(query=query or Query.of(""), suggestions=(), loading=False)

    @property
    def names(self) -> list[str]:
        return [c.name for c in self.suggestions]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query.raw,
            "loading": self.loading,
            "suggestions": [c.to_dict() for c in self.suggestions],
        }
