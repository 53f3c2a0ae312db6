"""Wayfinder: route templates compiled into a matcher and a URL builder.

A template mixes literal text, ``<name>`` / ``<name:regex>`` placeholders
and ``[...]`` optional segments. It is compiled once and then matched
against incoming URIs, or used to build URIs from values.

Basic usage::

    from wayfinder import compile_route

    route = compile_route("", "/<controller>[/<action>[/<id:\\d+>]]", match_host=False)

    route.match("/blog/show/42", {})
    # {"controller": "blog", "action": "show", "id": "42"}

    str(route.build({"controller": "blog", "page": 2}))
    # "blog?page=2"
"""

__version__ = "0.1.0"
__all__ = [
    "CompiledRoute",
    "ConfigurationError",
    "MalformedPatternError",
    "MatcherConfig",
    "Route",
    "RouteCache",
    "RouteMatch",
    "UnrepresentableValueError",
    "Uri",
    "UriLike",
    "WayfinderError",
    "build_query",
    "compile_cached",
    "compile_route",
    "parse_template",
    "stringify",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "CompiledRoute": "wayfinder.routing.matcher",
    "compile_route": "wayfinder.routing.matcher",
    "RouteCache": "wayfinder.routing.cache",
    "compile_cached": "wayfinder.routing.cache",
    "Route": "wayfinder.routing.route",
    "RouteMatch": "wayfinder.routing.route",
    "parse_template": "wayfinder.routing.template",
    "stringify": "wayfinder.routing.params",
    "MatcherConfig": "wayfinder.config",
    "Uri": "wayfinder.http.uri",
    "build_query": "wayfinder.http.query",
    "UriLike": "wayfinder._internal.types",
    "WayfinderError": "wayfinder.errors",
    "ConfigurationError": "wayfinder.errors",
    "MalformedPatternError": "wayfinder.errors",
    "UnrepresentableValueError": "wayfinder.errors",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wayfinder`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    from importlib import import_module

    return getattr(import_module(module_name), name)
