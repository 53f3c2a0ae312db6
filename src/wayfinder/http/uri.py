"""Immutable URI value.

The matcher only reads ``path`` and ``host``; the builder only creates
new values via ``with_query``. Nothing here mutates a ``Uri`` in place.
"""

from dataclasses import dataclass, replace
from typing import Self
from urllib.parse import urlsplit, urlunsplit


@dataclass(frozen=True, slots=True)
class Uri:
    """A parsed URI. Immutable; ``with_*`` methods return new values.

    Usage::

        uri = Uri.parse("https://example.com/blog/42?page=2")
        uri.host            # "example.com"
        uri.path            # "/blog/42"
        str(uri.with_query("page=3"))
    """

    scheme: str = ""
    host: str = ""
    port: int | None = None
    path: str = ""
    query: str = ""
    fragment: str = ""

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse an absolute or relative URI string."""
        parts = urlsplit(text)
        return cls(
            scheme=parts.scheme,
            host=parts.hostname or "",
            port=parts.port,
            path=parts.path,
            query=parts.query,
            fragment=parts.fragment,
        )

    @property
    def authority(self) -> str:
        if self.port is None:
            return self.host
        return f"{self.host}:{self.port}"

    def with_query(self, query: str) -> Self:
        """Return a copy with the query string replaced (without the leading ``?``)."""
        return replace(self, query=query)

    def with_path(self, path: str) -> Self:
        """Return a copy with the path replaced."""
        return replace(self, path=path)

    def __str__(self) -> str:
        return urlunsplit((self.scheme, self.authority, self.path, self.query, self.fragment))
