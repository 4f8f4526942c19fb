from __future__ import annotations
import locale
import re

_WS = re.compile(r"(\s+)")

def normalize_query(text: str) -> str:
    """Comparison form of a query or drug name: trimmed and lower-cased."""
    return (text or "").strip().lower()

def format_drug_name(term: str) -> str:
    """
    Title-case a raw remote term for display.
    Each whitespace-separated word keeps its first character upper-cased and
    the rest lower-cased, so "METFORMIN XR" -> "Metformin Xr".
    Separators are preserved as-is; only surrounding whitespace is dropped.
    Unlike a first-letter-only capitalization ("Metformin xr"), every word of
    a multi-word term is capitalized.
    """
    if not term:
        return ""
    parts = _WS.split(term.strip())
    out: list[str] = []
    for part in parts:
        if not part or part.isspace():
            out.append(part)
        else:
            out.append(part[0].upper() + part[1:].lower())
    return "".join(out)

def sort_key(name: str) -> str:
    """Case-insensitive, locale-aware collation key for alphabetical ordering."""
    return locale.strxfrm(name.casefold())
