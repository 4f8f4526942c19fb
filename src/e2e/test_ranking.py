# src/e2e/test_ranking.py

import pytest

from rxsuggest.models import Source
from rxsuggest.ranking import local_matches, merge, rank_local

DICT = ["Aspirin", "Ibuprofen", "Gabapentin"]


def test_prefix_query_ranks_starts_with_match():
    assert rank_local("Asp", DICT) == ["Aspirin"]


def test_substring_query_matches_inside_name():
    assert rank_local("ab", DICT) == ["Gabapentin"]


@pytest.mark.parametrize("q", ["", "a", " ", " a "])
def test_short_query_is_noop(q):
    assert rank_local(q, DICT) == []


def test_every_local_match_contains_query():
    names = ["Metformin", "Methotrexate", "Amlodipine", "Omeprazole", "Clopidogrel", "Dexamethasone"]
    for q in ("me", "ope", "ola", "thas"):
        for name in rank_local(q, names, limit=10):
            assert q in name.lower()


def test_starts_with_tier_before_contains_then_alphabetical():
    names = ["Dexamethasone", "methocarbamol", "Metformin", "Clomethiazole", "Methotrexate"]
    ranked = rank_local("meth", names, limit=10)
    assert ranked == ["methocarbamol", "Methotrexate", "Clomethiazole", "Dexamethasone"]


def test_local_truncated_to_five():
    names = [f"Drug{c}" for c in "abcdefgh"]
    assert rank_local("dr", names) == ["Druga", "Drugb", "Drugc", "Drugd", "Druge"]


def test_local_matches_are_case_insensitive():
    assert local_matches("ASPIRIN", ["aspirin", "Aspirin Plus", "Ibuprofen"]) == ["aspirin", "Aspirin Plus"]


def test_merge_starts_with_first_then_shortest():
    out = merge("gaba", ["Gabapentin"], ["Neurontin Gabapentin", "Gabarone", "Gabapentin Enacarbil"])
    assert [c.name for c in out] == ["Gabarone", "Gabapentin", "Gabapentin Enacarbil", "Neurontin Gabapentin"]


def test_merge_collapses_duplicates_and_keeps_local_tag():
    out = merge("met", ["Metformin", "Methotrexate"], ["Metformin", "Metformin Xr"])
    assert [c.name for c in out] == ["Metformin", "Methotrexate", "Metformin Xr"]
    assert [c.source for c in out] == [Source.LOCAL, Source.LOCAL, Source.REMOTE]


def test_merge_dedup_is_case_sensitive():
    out = merge("asp", ["Aspirin"], ["ASPIRIN"])
    assert [c.name for c in out] == ["Aspirin", "ASPIRIN"]


def test_merge_ranking_invariant_and_limit():
    local = ["Xamet"]
    remote = [f"Met{i:02d}" for i in range(15)]
    out = merge("met", local, remote)
    assert len(out) == 10
    names = [c.name for c in out]
    assert "Xamet" not in names  # contains-only entry pushed past the cap

    out = merge("met", ["Xamet"], ["Metx"], limit=10)
    starts = [c.name.lower().startswith("met") for c in out]
    assert starts == sorted(starts, reverse=True)


def test_merge_uses_original_query_not_remote_casing():
    out = merge("Ibu", [], ["IBUPROFEN", "Advil Ibuprofen"])
    assert [c.name for c in out] == ["IBUPROFEN", "Advil Ibuprofen"]
    assert all(c.source is Source.REMOTE for c in out)


def test_limits_must_be_positive():
    with pytest.raises(ValueError):
        rank_local("asp", DICT, limit=0)
    with pytest.raises(ValueError):
        merge("asp", [], [], limit=0)
