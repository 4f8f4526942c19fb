import json
from pathlib import Path

import pytest

from rxsuggest.cache import LRUCache, MemoryCache, make_cache
from rxsuggest.dictionary import DrugDictionary, load_dictionary


# ---------- cache ----------

def test_memory_cache_grows_without_eviction():
    c = MemoryCache()
    for i in range(1000):
        c.set(f"q{i}", [f"Name{i}"])
    assert len(c) == 1000
    assert c.get("q0") == ["Name0"]
    assert c.get("missing") is None


def test_cached_empty_list_is_a_hit():
    c = MemoryCache()
    c.set("zz", [])
    assert "zz" in c
    assert c.get("zz") == []


def test_cache_returns_copies():
    c = MemoryCache()
    c.set("met", ["Metformin"])
    c.get("met").append("junk")
    assert c.get("met") == ["Metformin"]


def test_lru_evicts_least_recently_used():
    c = LRUCache(2)
    c.set("a", ["A"])
    c.set("b", ["B"])
    assert c.get("a") == ["A"]   # touch a
    c.set("c", ["C"])            # evicts b
    assert "b" not in c
    assert c.get("a") == ["A"] and c.get("c") == ["C"]


def test_make_cache():
    assert isinstance(make_cache(), MemoryCache)
    assert isinstance(make_cache(0), MemoryCache)
    lru = make_cache(5)
    assert isinstance(lru, LRUCache) and lru.max_entries == 5
    with pytest.raises(ValueError):
        make_cache(-1)


# ---------- dictionary ----------

def test_bundled_dictionary_loads():
    d = load_dictionary()
    assert len(d) > 50
    assert "Metformin" in d
    assert "Gabapentin" in d


def test_txt_dictionary_skips_comments_and_duplicates(tmp_path: Path):
    p = tmp_path / "meds.txt"
    p.write_text("# header\nAspirin\n\naspirin\n  Ibuprofen  \n", encoding="utf-8")
    d = load_dictionary([str(p)])
    assert d.names == ("Aspirin", "Ibuprofen")


def test_json_dictionary_reads_names_and_generics(tmp_path: Path):
    p = tmp_path / "medications.json"
    p.write_text(json.dumps([
        {"id": "uz_med_001", "name": "Trimol", "genericName": "Paracetamol + Diclofenac"},
        {"id": "uz_med_002", "name": "Kyupene"},
        "Aspirin",
    ]), encoding="utf-8")
    d = load_dictionary([str(p)])
    assert list(d) == ["Trimol", "Paracetamol + Diclofenac", "Kyupene", "Aspirin"]


def test_directory_is_scanned_recursively(tmp_path: Path):
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "one.txt").write_text("Warfarin\n", encoding="utf-8")
    (tmp_path / "b.json").write_text('["Heparin"]', encoding="utf-8")
    (tmp_path / "ignored.csv").write_text("Nope\n", encoding="utf-8")
    d = load_dictionary([str(tmp_path)])
    assert set(d) == {"Warfarin", "Heparin"}


def test_missing_path_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_dictionary([str(tmp_path / "nope.txt")])


def test_bad_json_shape_raises(tmp_path: Path):
    p = tmp_path / "bad.json"
    p.write_text('"just a string"', encoding="utf-8")
    with pytest.raises(ValueError):
        load_dictionary([str(p)])


def test_from_names():
    d = DrugDictionary.from_names(["B", "a", "A", ""])
    assert d.names == ("B", "a")
