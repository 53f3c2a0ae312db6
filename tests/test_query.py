"""Tests for wayfinder.http.query: build_query."""

from urllib.parse import parse_qs

import pytest

from wayfinder.errors import UnrepresentableValueError
from wayfinder.http.query import build_query


class TestBuildQuery:
    def test_scalars(self) -> None:
        assert build_query({"page": 2, "q": "a b"}) == "page=2&q=a+b"

    def test_sequence_repeats_key(self) -> None:
        assert build_query({"tag": ["a", "b"]}) == "tag=a&tag=b"

    def test_nested_mapping(self) -> None:
        assert build_query({"filter": {"status": "open"}}) == "filter%5Bstatus%5D=open"

    def test_none_skipped(self) -> None:
        assert build_query({"a": None, "b": "1", "c": [None, "2"]}) == "b=1&c=2"

    def test_empty(self) -> None:
        assert build_query({}) == ""

    def test_parses_back(self) -> None:
        parsed = parse_qs(build_query({"tag": ["x", "y"], "page": 1}))
        assert parsed == {"tag": ["x", "y"], "page": ["1"]}

    def test_strict_unrepresentable(self) -> None:
        with pytest.raises(UnrepresentableValueError):
            build_query({"cb": print}, strict=True)

    def test_lenient_unrepresentable(self) -> None:
        assert build_query({"cb": print}) == "cb="
