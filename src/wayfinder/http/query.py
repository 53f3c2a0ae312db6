"""Query strings for built URIs.

``build_query`` encodes the values a template does not consume.
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from wayfinder.routing.params import stringify


def build_query(params: Mapping[str, Any], *, strict: bool = False) -> str:
    """URL-encode *params* into a query string.

    Sequences repeat the key (``tag=a&tag=b``), nested mappings use
    bracket keys (``filter[status]=open``) and ``None`` values are
    skipped. Scalars go through ``stringify``.

    Examples::

        >>> build_query({"page": 2, "tag": ["a", "b"]})
        'page=2&tag=a&tag=b'
        >>> build_query({"filter": {"status": "open"}})
        'filter%5Bstatus%5D=open'
    """
    pairs: list[tuple[str, str]] = []
    _flatten("", params, pairs, strict)
    return urlencode(pairs)


def _flatten(
    base: str,
    params: Mapping[str, Any],
    pairs: list[tuple[str, str]],
    strict: bool,
) -> None:
    for key, value in params.items():
        name = f"{base}[{key}]" if base else str(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            _flatten(name, value, pairs, strict)
        elif isinstance(value, list | tuple | set | frozenset):
            pairs.extend(
                (name, stringify(item, name=name, strict=strict))
                for item in value
                if item is not None
            )
        else:
            pairs.append((name, stringify(value, name=name, strict=strict)))
