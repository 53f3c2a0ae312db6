"""Tests for wayfinder.http.uri: immutable Uri value."""

import pytest

from wayfinder._internal.types import UriLike
from wayfinder.http.uri import Uri


class TestParse:
    def test_absolute(self) -> None:
        uri = Uri.parse("https://example.com:8443/blog/42?page=2#top")
        assert uri.scheme == "https"
        assert uri.host == "example.com"
        assert uri.port == 8443
        assert uri.path == "/blog/42"
        assert uri.query == "page=2"
        assert uri.fragment == "top"

    def test_relative(self) -> None:
        uri = Uri.parse("/blog/42")
        assert uri.host == ""
        assert uri.path == "/blog/42"

    def test_empty(self) -> None:
        assert Uri.parse("") == Uri()


class TestUri:
    def test_with_query_returns_copy(self) -> None:
        uri = Uri(path="/blog")
        other = uri.with_query("page=2")
        assert uri.query == ""
        assert other.query == "page=2"
        assert other.path == "/blog"

    def test_with_path(self) -> None:
        assert Uri(path="/a").with_path("/b").path == "/b"

    def test_str_relative(self) -> None:
        assert str(Uri(path="blog/edit", query="page=2")) == "blog/edit?page=2"

    def test_str_absolute(self) -> None:
        text = "https://example.com:8443/blog?page=2"
        assert str(Uri.parse(text)) == text

    def test_frozen(self) -> None:
        uri = Uri()
        with pytest.raises(AttributeError):
            uri.path = "/x"  # type: ignore[misc]

    def test_satisfies_protocol(self) -> None:
        assert isinstance(Uri(), UriLike)
