from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass
from importlib import resources
from typing import Iterable, Iterator, List, Optional, Sequence

from .normalize import normalize_query

log = logging.getLogger(__name__)

BUNDLED_ASSET = "common_drugs.txt"
_EXTS = (".txt", ".json")


@dataclass(frozen=True)
class DrugDictionary:
    """Read-only, ordered collection of known drug display names."""
    names: tuple[str, ...]

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.names

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "DrugDictionary":
        return cls(names=tuple(_dedupe(names)))


def _dedupe(names: Iterable[str]) -> List[str]:
    """Drop blanks and repeats by normalized form; first spelling wins."""
    seen: set[str] = set()
    out: List[str] = []
    for raw in names:
        name = (raw or "").strip()
        key = normalize_query(name)
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(name)
    return out


def _iter_files(paths: Iterable[str]) -> Iterable[str]:
    """Yield dictionary files; directories are scanned recursively in sorted order."""
    for p in paths:
        if os.path.isdir(p):
            for dirpath, dirnames, filenames in os.walk(p):
                dirnames.sort()
                for fn in sorted(filenames):
                    if fn.lower().endswith(_EXTS):
                        yield os.path.join(dirpath, fn)
        elif os.path.isfile(p):
            yield p
        else:
            raise FileNotFoundError(p)


def parse_text(text: str) -> List[str]:
    """One name per line; blank lines and '#' comments ignored."""
    out: List[str] = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        out.append(line)
    return out


def parse_json(text: str) -> List[str]:
    """
    Accepts either a list of strings, or a list of medication records with
    "name" and optional "genericName" fields (the app's verified-meds asset).
    """
    data = json.loads(text)
    if isinstance(data, dict):
        data = data.get("medications") or data.get("results") or []
    if not isinstance(data, list):
        raise ValueError("dictionary JSON must be a list")
    out: List[str] = []
    for item in data:
        if isinstance(item, str):
            out.append(item)
        elif isinstance(item, dict):
            for key in ("name", "genericName"):
                val = item.get(key)
                if isinstance(val, str) and val.strip():
                    out.append(val)
    return out


def _read_file(path: str) -> List[str]:
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    if path.lower().endswith(".json"):
        return parse_json(text)
    return parse_text(text)


def bundled_names() -> List[str]:
    text = resources.files(__package__).joinpath("data", BUNDLED_ASSET).read_text(encoding="utf-8")
    return parse_text(text)


def load_dictionary(paths: Optional[Sequence[str]] = None) -> DrugDictionary:
    """
    Build the static dictionary.
    No paths -> the bundled common-medications list.
    Paths may be .txt/.json files or folders containing them.
    """
    if not paths:
        d = DrugDictionary.from_names(bundled_names())
        log.info("Loaded bundled dictionary: %d names", len(d))
        return d

    names: List[str] = []
    file_count = 0
    for path in _iter_files(paths):
        names.extend(_read_file(path))
        file_count += 1
    d = DrugDictionary.from_names(names)
    log.info("Loaded dictionary from %d file(s): %d names", file_count, len(d))
    return d
