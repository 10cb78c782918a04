import pytest

from grocy_api.clients import dispatch as d
from grocy_api.clients.errors import GrocyAPIError, GrocyHTTPError


@pytest.mark.parametrize(
    "raw",
    ["https://h", "https://h/", "https://h/api", "https://h/api/", "  https://h  "],
)
def test_normalize_base_url_appends_single_api_segment(raw):
    assert d.normalize_base_url(raw) == "https://h/api"


def test_normalize_base_url_is_idempotent():
    once = d.normalize_base_url("http://grocy.local:9283/sub")
    assert once == "http://grocy.local:9283/sub/api"
    assert d.normalize_base_url(once) == once


def test_build_query_pairs_expands_sequences_in_order():
    pairs = d.build_query_pairs({"k": ["a", "b", "c"], "order": "name"})
    assert pairs == [("k[]", "a"), ("k[]", "b"), ("k[]", "c"), ("order", "name")]
    assert [name for name, _ in pairs].count("k") == 0


def test_build_query_pairs_drops_none_values():
    pairs = d.build_query_pairs({"limit": None, "offset": 0, "query": "name=Milk"})
    assert pairs == [("offset", "0"), ("query", "name=Milk")]


def test_build_query_pairs_stringifies_scalars():
    pairs = d.build_query_pairs({"n": 5, "f": 1.5, "flag": True, "tuple": (1, False)})
    assert pairs == [
        ("n", "5"),
        ("f", "1.5"),
        ("flag", "true"),
        ("tuple[]", "1"),
        ("tuple[]", "false"),
    ]


@pytest.mark.parametrize("params", [None, {}])
def test_build_query_pairs_handles_empty_input(params):
    assert d.build_query_pairs(params) == []


def test_encode_segment_escapes_reserved_characters():
    assert d.encode_segment("a b/c?d") == "a%20b%2Fc%3Fd"
    assert d.encode_segment(42) == "42"


def test_request_failure_prefixes_message_and_keeps_status():
    error = d.request_failure(GrocyHTTPError(404, "Not found"))
    assert isinstance(error, GrocyAPIError)
    assert str(error) == "Grocy API request failed: Not found"
    assert error.reason == "Not found"
    assert error.status_code == 404


def test_request_failure_without_status():
    error = d.request_failure(ConnectionError("refused"))
    assert str(error) == "Grocy API request failed: refused"
    assert error.status_code is None
