"""Insert-once, read-many cache of compiled routes.

Free-threading safety:
    - Lookups of a cached key are a plain dict read, no lock taken
    - Misses compile outside the lock, then insert under ``threading.Lock``
    - First writer wins: concurrent misses for the same key all get the
      instance that was stored first
"""

import logging
import threading

from wayfinder.config import DEFAULT_CONFIG, MatcherConfig
from wayfinder.routing.matcher import CompiledRoute, compile_route

logger = logging.getLogger("wayfinder.routing")

CacheKey = tuple[str, str, bool, MatcherConfig]


class RouteCache:
    """Thread-safe cache of ``CompiledRoute`` keyed by compile arguments.

    Usage::

        cache = RouteCache()
        compiled = cache.get_or_compile("", "/<controller>[/<action>]", False)
        assert cache.get_or_compile("", "/<controller>[/<action>]", False) is compiled
    """

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[CacheKey, CompiledRoute] = {}

    def get_or_compile(
        self,
        prefix: str,
        pattern: str,
        match_host: bool,
        config: MatcherConfig | None = None,
    ) -> CompiledRoute:
        """Return the cached route for these arguments, compiling it on first use.

        Compilation errors propagate and nothing is cached for the key.
        """
        key: CacheKey = (prefix, pattern, match_host, config or DEFAULT_CONFIG)
        compiled = self._entries.get(key)
        if compiled is not None:
            return compiled

        logger.debug("Route cache miss for %r", pattern)
        compiled = compile_route(prefix, pattern, match_host, key[3])
        with self._lock:
            return self._entries.setdefault(key, compiled)

    def clear(self) -> None:
        with self._lock:
            self._entries = {}

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


default_cache = RouteCache()


def compile_cached(
    prefix: str,
    pattern: str,
    match_host: bool,
    config: MatcherConfig | None = None,
) -> CompiledRoute:
    """``compile_route`` backed by the process-wide ``default_cache``."""
    return default_cache.get_or_compile(prefix, pattern, match_host, config)
