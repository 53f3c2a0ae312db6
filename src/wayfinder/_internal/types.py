"""Shared type aliases and protocols used across wayfinder modules."""

from collections.abc import Mapping
from typing import Any, Protocol, Self, TypeAlias, runtime_checkable


@runtime_checkable
class UriLike(Protocol):
    """The slice of a URI the matcher and builder need.

    Any object exposing ``path``, ``host`` and a non-mutating
    ``with_query`` works; ``wayfinder.http.uri.Uri`` is the bundled one.
    """

    @property
    def path(self) -> str: ...

    @property
    def host(self) -> str: ...

    def with_query(self, query: str) -> Self: ...


# Result of a successful match: declared variable -> captured text or None
Matches: TypeAlias = dict[str, str | None]

# Caller-supplied defaults overlaid on declared-but-unset variables
Defaults: TypeAlias = Mapping[str, str | None]

# Values handed to build: anything stringify() understands
BuildValues: TypeAlias = Mapping[str, Any]
