# rxsuggest/cache.py
from __future__ import annotations
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Protocol


class SuggestionCache(Protocol):
    """normalized query -> remote names already fetched for it."""
    def get(self, key: str) -> Optional[List[str]]: ...
    def set(self, key: str, names: Iterable[str]) -> None: ...
    def __contains__(self, key: object) -> bool: ...
    def __len__(self) -> int: ...
    def clear(self) -> None: ...


class MemoryCache:
    """Unbounded session cache: every distinct query that reaches the network stays."""
    def __init__(self) -> None:
        self._rows: Dict[str, List[str]] = {}

    def get(self, key: str) -> Optional[List[str]]:
        names = self._rows.get(key)
        return list(names) if names is not None else None

    def set(self, key: str, names: Iterable[str]) -> None:
        self._rows[key] = list(names)

    def __contains__(self, key: object) -> bool:
        return key in self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def clear(self) -> None:
        self._rows.clear()


class LRUCache:
    """Bounded variant for long-lived processes; least recently used goes first."""
    def __init__(self, max_entries: int) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self._rows: OrderedDict[str, List[str]] = OrderedDict()

    def get(self, key: str) -> Optional[List[str]]:
        if key not in self._rows:
            return None
        self._rows.move_to_end(key)
        return list(self._rows[key])

    def set(self, key: str, names: Iterable[str]) -> None:
        self._rows[key] = list(names)
        self._rows.move_to_end(key)
        while len(self._rows) > self.max_entries:
            self._rows.popitem(last=False)

    def __contains__(self, key: object) -> bool:
        return key in self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def clear(self) -> None:
        self._rows.clear()


def make_cache(max_entries: Optional[int] = None) -> SuggestionCache:
    """
    Factory:
      - None / 0 -> MemoryCache (unbounded, session lifetime)
      - N > 0    -> LRUCache(N)
    """
    if max_entries is None or max_entries == 0:
        return MemoryCache()
    if max_entries < 0:
        raise ValueError(f"Unsupported cache size: {max_entries}")
    return LRUCache(max_entries)
