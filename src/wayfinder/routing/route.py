"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from wayfinder._internal.types import BuildValues, Defaults, Matches, UriLike
from wayfinder.config import MatcherConfig
from wayfinder.http.uri import Uri
from wayfinder.routing.cache import compile_cached
from wayfinder.routing.matcher import CompiledRoute


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition: a template plus the defaults it matches with.

    The template is compiled (through the shared cache) when the route is
    created, so a malformed pattern fails at registration::

        route = Route("/<controller>[/<action>]").with_defaults(controller="home")
        route.match("/blog").matches   # {"controller": "blog", "action": None}
        str(route.uri(controller="blog", action="edit"))   # "blog/edit"
    """

    pattern: str
    defaults: Mapping[str, str | None] = field(default_factory=dict, hash=False)
    prefix: str = ""
    match_host: bool = False
    name: str | None = None
    config: MatcherConfig | None = None

    def __post_init__(self) -> None:
        # Compile eagerly so a malformed pattern fails at registration
        compile_cached(self.prefix, self.pattern, self.match_host, self.config)

    @property
    def compiled(self) -> CompiledRoute:
        return compile_cached(self.prefix, self.pattern, self.match_host, self.config)

    @property
    def variables(self) -> tuple[str, ...]:
        return self.compiled.variables

    def get_defaults(self) -> Matches:
        """Declared variables (as ``None``) overlaid by this route's defaults."""
        result: Matches = dict.fromkeys(self.variables)
        result.update(self.defaults)
        return result

    def with_defaults(self, defaults: Defaults | None = None, **kwargs: str | None) -> "Route":
        """Return a copy whose defaults are replaced by *defaults* and *kwargs*."""
        return replace(self, defaults={**(defaults or {}), **kwargs})

    def with_prefix(self, prefix: str) -> "Route":
        """Return a copy matched and built under *prefix*."""
        return replace(self, prefix=prefix)

    def match(self, uri: UriLike | str) -> "RouteMatch | None":
        """Match *uri*; ``None`` means this route does not apply."""
        matches = self.compiled.match(uri, self.defaults)
        if matches is None:
            return None
        return RouteMatch(route=self, matches=matches)

    def uri(self, values: BuildValues | None = None, **kwargs: Any) -> Uri:
        """Build a URI; route defaults fill declared variables not given."""
        merged: dict[str, Any] = {
            name: value
            for name, value in self.defaults.items()
            if name in self.variables and value is not None
        }
        merged.update(values or {})
        merged.update(kwargs)
        return self.compiled.build(merged)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    matches: Matches

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the value of variable *name*, or *default* when unset."""
        value = self.matches.get(name)
        return default if value is None else value
