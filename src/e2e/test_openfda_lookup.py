# src/e2e/test_openfda_lookup.py

import asyncio

import httpx
import pytest

from rxsuggest.lookup import NullLookup, OpenFDALookup, RemoteLookupError, StaticLookup


def _lookup(handler, **kw) -> OpenFDALookup:
    return OpenFDALookup(url="https://api.fda.gov/drug/label.json", transport=httpx.MockTransport(handler), **kw)


def test_builds_term_count_prefix_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"results": [{"term": "GABAPENTIN", "count": 120}, {"term": "GABARONE", "count": 3}]})

    terms = asyncio.run(_lookup(handler, api_key=None)("Gab"))
    assert terms == ["GABAPENTIN", "GABARONE"]
    assert seen["params"]["count"] == "openfda.brand_name.exact"
    assert seen["params"]["limit"] == "10"
    assert seen["params"]["search"] == 'openfda.brand_name:"Gab*"'
    assert "api_key" not in seen["params"]


def test_api_key_is_forwarded():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json={"results": []})

    asyncio.run(_lookup(handler, api_key="k123")("met"))
    assert seen["api_key"] == "k123"


def test_not_found_means_no_matches():
    def handler(request):
        return httpx.Response(404, json={"error": {"code": "NOT_FOUND", "message": "No matches found!"}})

    assert asyncio.run(_lookup(handler)("zzz")) == []


@pytest.mark.parametrize("response", [
    httpx.Response(500, text="boom"),
    httpx.Response(429, json={"error": "rate limited"}),
    httpx.Response(200, text="not json"),
    httpx.Response(200, json=["unexpected"]),
    httpx.Response(200, json={"results": "nope"}),
])
def test_bad_responses_raise_lookup_error(response):
    with pytest.raises(RemoteLookupError):
        asyncio.run(_lookup(lambda request: response)("asp"))


def test_transport_error_raises_lookup_error():
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    with pytest.raises(RemoteLookupError):
        asyncio.run(_lookup(handler)("asp"))


def test_skips_blank_terms_and_caps_to_limit():
    rows = [{"term": f"DRUG {i}"} for i in range(12)] + [{"term": ""}, {"count": 1}]

    def handler(request):
        return httpx.Response(200, json={"results": rows})

    terms = asyncio.run(_lookup(handler, limit=3)("dr"))
    assert terms == ["DRUG 0", "DRUG 1", "DRUG 2"]


def test_quotes_in_prefix_are_escaped():
    seen = {}

    def handler(request):
        seen.update(request.url.params)
        return httpx.Response(200, json={"results": []})

    asyncio.run(_lookup(handler)('a"b'))
    assert seen["search"] == 'openfda.brand_name:"a\\"b*"'


def test_static_and_null_lookups():
    s = StaticLookup({"Met": ["METFORMIN XR"]})
    assert asyncio.run(s("MET")) == ["METFORMIN XR"]
    assert asyncio.run(s("ibu")) == []
    assert s.calls == ["MET", "ibu"]
    assert asyncio.run(NullLookup()("anything")) == []
