"""Compile route templates into a matcher and its inverse, a builder.

Examples of templates::

    "userPanel/<action>"
    "[<controller>[/<action>[/<id>]]]"
    "domain.com[/<controller>[/<action>[/<id:\\d+>]]]"

A template is compiled once, at route registration, into an immutable
``CompiledRoute`` that can be shared and used concurrently by any number
of ``match`` and ``build`` calls.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from wayfinder._internal.types import BuildValues, Defaults, Matches, UriLike
from wayfinder.config import DEFAULT_CONFIG, MatcherConfig
from wayfinder.errors import MalformedPatternError
from wayfinder.http.query import build_query
from wayfinder.http.uri import Uri
from wayfinder.routing.params import stringify
from wayfinder.routing.template import (
    Literal,
    Node,
    Placeholder,
    Template,
    parse_template,
    strip_slashes,
)

logger = logging.getLogger("wayfinder.routing")

# Two or more slashes not preceded by ":" (keeps "scheme://" intact)
_REPEATED_SLASHES = re.compile(r"(?<!:)/{2,}")

# "scheme://" or "//" at the start of a string that names an authority
_AUTHORITY = re.compile(r"\A(?:[a-z][a-z0-9+.\-]*:)?//", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class CompiledRoute:
    """A compiled route template. Immutable; safe to share across threads.

    Attributes:
        prefix: Literal path prefix stripped before matching (path mode only).
        match_host: Match against ``host + path`` instead of the path alone.
        match_pattern: Anchored regular expression with one named group per
            variable.
        generation_template: The template with constraints stripped, e.g.
            ``/<controller>[/<action>]``.
        variables: Declared variable names in order of first appearance.
    """

    prefix: str
    match_host: bool
    match_pattern: str
    generation_template: str
    variables: tuple[str, ...]
    template: Template = field(repr=False)
    config: MatcherConfig = field(default=DEFAULT_CONFIG, repr=False)
    _regex: re.Pattern[str] = field(init=False, repr=False, compare=False)
    _prefix_regex: re.Pattern[str] | None = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        flags = self.config.regex_flags
        try:
            regex = re.compile(self.match_pattern, flags)
        except re.error as exc:
            msg = f"Invalid variable constraint ({exc})"
            raise MalformedPatternError(msg, self.template.source) from exc
        object.__setattr__(self, "_regex", regex)

        head = self.prefix.strip("/")
        prefix_regex = None
        if head and not self.match_host:
            prefix_regex = re.compile(rf"\A{re.escape(head)}(?=/|\Z)", flags)
        object.__setattr__(self, "_prefix_regex", prefix_regex)

    # -- Matching --

    def match(self, uri: UriLike | str, defaults: Defaults | None = None) -> Matches | None:
        """Match *uri* and return its variables, or ``None`` if it does not apply.

        The result maps every declared variable to ``None``, overlaid by
        *defaults*, overlaid by the captured values. A variable whose
        optional segment is absent from the URI keeps its default, or
        ``None`` when there is none (never ``""``).
        """
        if isinstance(uri, str):
            uri = _parse_target(uri)

        target = self._target(uri)
        if target is None:
            return None

        found = self._regex.fullmatch(target)
        if found is None:
            return None

        captured = {
            name: value
            for name, value in found.groupdict().items()
            if name in self.variables and value is not None
        }
        result: Matches = dict.fromkeys(self.variables)
        if defaults:
            result.update(defaults)
        result.update(captured)
        return result

    def _target(self, uri: UriLike) -> str | None:
        """The part of *uri* the pattern is applied to, or ``None`` if the prefix differs."""
        path = uri.path
        if not path or path[0] != "/":
            path = "/" + path

        if self.match_host:
            return f"{uri.host}{path}".strip("/")

        rest = path.lstrip("/")
        if self._prefix_regex is not None:
            head = self._prefix_regex.match(rest)
            if head is None:
                return None
            rest = rest[head.end() :]
        return rest.strip("/")

    # -- Building --

    def build(
        self,
        values: BuildValues | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> Uri:
        """Build a URI from variable *values*.

        Values for declared variables are substituted into the template;
        every other key, plus *query*, is attached as the query string.
        An optional segment that owns a placeholder is dropped when every
        variable inside it is empty; a literal-only segment is kept.
        Values are not checked against their variable's constraint.
        """
        values = values or {}
        strict = self.config.strict_values

        texts = {
            name: stringify(values[name], name=name, strict=strict)
            for name in self.variables
            if name in values
        }
        leftover = {key: value for key, value in values.items() if key not in texts}
        if query:
            leftover.update(query)
        leftover = {key: value for key, value in leftover.items() if value is not None}

        path, _ = _render_path(self.template.children, texts)
        path = _REPEATED_SLASHES.sub("/", path).strip("/")
        if not self.match_host and self.prefix:
            separator = "/" if path and not self.prefix.endswith("/") else ""
            path = f"{self.prefix}{separator}{path}"

        uri = Uri(path=path)
        if not leftover:
            return uri
        return uri.with_query(build_query(leftover, strict=strict))


def compile_route(
    prefix: str,
    pattern: str,
    match_host: bool,
    config: MatcherConfig | None = None,
) -> CompiledRoute:
    """Compile *pattern* into a ``CompiledRoute``.

    Raises ``MalformedPatternError`` if brackets are unbalanced, a
    placeholder is unterminated or badly named, or a constraint is not a
    valid regular expression.
    """
    config = config or DEFAULT_CONFIG
    template = strip_slashes(parse_template(pattern))
    constraints = template.constraints()

    body = _render_regex(template.children, constraints, config.default_segment, set())
    compiled = CompiledRoute(
        prefix=prefix,
        match_host=match_host,
        match_pattern=rf"\A{body}\Z",
        generation_template=_render_template(template.children),
        variables=template.variables(),
        template=template,
        config=config,
    )
    logger.debug("Compiled route %r -> %s", pattern, compiled.match_pattern)
    return compiled


def _render_regex(
    nodes: tuple[Node, ...],
    constraints: dict[str, str | None],
    default_segment: str,
    seen: set[str],
) -> str:
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, Literal):
            parts.append(re.escape(node.text))
        elif isinstance(node, Placeholder):
            if node.name in seen:
                # A repeated variable must capture the same text again
                parts.append(f"(?P={node.name})")
            else:
                seen.add(node.name)
                parts.append(f"(?P<{node.name}>{constraints[node.name] or default_segment})")
        else:
            inner = _render_regex(node.children, constraints, default_segment, seen)
            parts.append(f"(?:{inner})?")
    return "".join(parts)


def _render_template(nodes: tuple[Node, ...]) -> str:
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, Literal):
            parts.append(node.text)
        elif isinstance(node, Placeholder):
            parts.append(f"<{node.name}>")
        else:
            parts.append(f"[{_render_template(node.children)}]")
    return "".join(parts)


def _render_path(nodes: tuple[Node, ...], texts: Mapping[str, str]) -> tuple[str, bool]:
    """Substitute *texts* into *nodes*; also report whether any variable was non-empty."""
    parts: list[str] = []
    filled = False
    for node in nodes:
        if isinstance(node, Literal):
            parts.append(node.text)
        elif isinstance(node, Placeholder):
            text = texts.get(node.name, "")
            parts.append(text)
            filled = filled or bool(text)
        else:
            inner, inner_filled = _render_path(node.children, texts)
            # A segment owning a placeholder goes when nothing inside it is set;
            # one owning only literals keeps its text
            owns_placeholder = any(isinstance(child, Placeholder) for child in node.children)
            if owns_placeholder and not inner_filled:
                continue
            parts.append(inner)
            filled = filled or inner_filled
    return "".join(parts), filled


def _parse_target(text: str) -> Uri:
    """Read a string passed to ``match``: a path unless it names an authority.

    ``tag:python`` is the path ``/tag:python``; ``urlsplit`` alone would
    take ``tag`` for a scheme.
    """
    if _AUTHORITY.match(text):
        return Uri.parse(text)
    if not text.startswith("/"):
        text = "/" + text
    return Uri.parse(text)
