"""Route template parser.

Turns a template string into a typed tree that both the match pattern and
the generation template are rendered from::

    "/<controller>[/<action>[/<id:\\d+>]]"
    -> Template([
           Literal("/"),
           Placeholder("controller"),
           OptionalSegment([
               Literal("/"),
               Placeholder("action"),
               OptionalSegment([Literal("/"), Placeholder("id", r"\\d+")]),
           ]),
       ])

Optional segments (``[...]``) nest arbitrarily. A placeholder's constraint
runs from ``:`` to the first ``>``; brackets inside it are regex syntax,
not optional segments. A backslash in literal text escapes the next
character.
"""

from collections.abc import Iterator
from dataclasses import dataclass

from wayfinder.errors import MalformedPatternError


@dataclass(frozen=True, slots=True)
class Literal:
    """Literal template text, matched verbatim."""

    text: str


@dataclass(frozen=True, slots=True)
class Placeholder:
    """A ``<name>`` or ``<name:constraint>`` variable.

    ``constraint`` is ``None`` for ``<name>`` and ``<name:>`` alike.
    """

    name: str
    constraint: str | None = None


@dataclass(frozen=True, slots=True)
class OptionalSegment:
    """A ``[...]`` segment that may be absent from the target."""

    children: tuple["Node", ...]


Node = Literal | Placeholder | OptionalSegment


@dataclass(frozen=True, slots=True)
class Template:
    """Root of a parsed template."""

    source: str
    children: tuple[Node, ...]

    def placeholders(self) -> Iterator[Placeholder]:
        """Yield every placeholder in template order, nested ones included."""
        yield from iter_placeholders(self.children)

    def variables(self) -> tuple[str, ...]:
        """Distinct placeholder names in order of first appearance."""
        return tuple(dict.fromkeys(p.name for p in self.placeholders()))

    def constraints(self) -> dict[str, str | None]:
        """Map each variable to its constraint; the last one given wins."""
        result: dict[str, str | None] = {}
        for placeholder in self.placeholders():
            if placeholder.constraint is not None or placeholder.name not in result:
                result[placeholder.name] = placeholder.constraint
        return result


def iter_placeholders(nodes: tuple[Node, ...]) -> Iterator[Placeholder]:
    """Yield the placeholders in *nodes*, descending into optional segments."""
    for node in nodes:
        if isinstance(node, Placeholder):
            yield node
        elif isinstance(node, OptionalSegment):
            yield from iter_placeholders(node.children)


def parse_template(source: str) -> Template:
    """Parse a route template into a ``Template`` tree.

    Raises ``MalformedPatternError`` on unbalanced brackets, unterminated
    placeholders, placeholder names that are not identifiers, and a
    trailing lone backslash.
    """
    # Each frame: (position of its "[", children collected so far)
    stack: list[tuple[int, list[Node]]] = [(-1, [])]
    literal: list[str] = []
    i = 0
    length = len(source)

    def flush() -> None:
        if literal:
            stack[-1][1].append(Literal("".join(literal)))
            literal.clear()

    while i < length:
        char = source[i]

        if char == "\\":
            if i + 1 >= length:
                raise MalformedPatternError("Trailing backslash", source, i)
            literal.append(source[i + 1])
            i += 2
            continue

        if char == "[":
            flush()
            stack.append((i, []))
        elif char == "]":
            if len(stack) == 1:
                raise MalformedPatternError("Unbalanced ']'", source, i)
            flush()
            _, children = stack.pop()
            stack[-1][1].append(OptionalSegment(tuple(children)))
        elif char == "<":
            flush()
            placeholder, i = _parse_placeholder(source, i)
            stack[-1][1].append(placeholder)
            continue
        else:
            literal.append(char)
        i += 1

    if len(stack) > 1:
        raise MalformedPatternError("Unclosed '['", source, stack[-1][0])

    flush()
    return Template(source=source, children=tuple(stack[0][1]))


def _parse_placeholder(source: str, start: int) -> tuple[Placeholder, int]:
    """Parse the placeholder opening at *start*; return it and the next index."""
    end = source.find(">", start)
    if end == -1:
        raise MalformedPatternError("Unterminated placeholder", source, start)

    body = source[start + 1 : end]
    name, _, constraint = body.partition(":")
    if not name.isidentifier():
        msg = f"Invalid placeholder name {name!r}"
        raise MalformedPatternError(msg, source, start)

    return Placeholder(name=name, constraint=constraint or None), end + 1


def strip_slashes(template: Template) -> Template:
    """Drop leading and trailing ``/`` from *template*, looking inside edge segments.

    Targets are trimmed of separators before matching, so ``/blog/<id>``
    and ``blog/<id>`` must compile to the same pattern.
    """
    children = _strip_edge(template.children, leading=True)
    children = _strip_edge(children, leading=False)
    return Template(source=template.source, children=children)


def _strip_edge(nodes: tuple[Node, ...], *, leading: bool) -> tuple[Node, ...]:
    if not nodes:
        return nodes
    index = 0 if leading else -1
    node = nodes[index]
    rest = nodes[1:] if leading else nodes[:-1]

    if isinstance(node, Literal):
        text = node.text.lstrip("/") if leading else node.text.rstrip("/")
        if not text:
            return _strip_edge(rest, leading=leading)
        node = Literal(text)
    elif isinstance(node, OptionalSegment):
        children = _strip_edge(node.children, leading=leading)
        if children != node.children:
            node, rest = _absorb_separator(children, rest, leading=leading)
        else:
            node = OptionalSegment(children)
    else:
        return nodes

    return (node, *rest) if leading else (*rest, node)


def _absorb_separator(
    children: tuple[Node, ...],
    rest: tuple[Node, ...],
    *,
    leading: bool,
) -> tuple[OptionalSegment, tuple[Node, ...]]:
    """Move the ``/`` beside an edge segment inside it, once its own was stripped.

    ``[/<lang>]/<controller>`` becomes ``[<lang>/]<controller>`` so the
    required part still matches when the segment is absent.
    """
    if not rest:
        return OptionalSegment(children), rest
    neighbour = rest[0] if leading else rest[-1]
    if not isinstance(neighbour, Literal):
        return OptionalSegment(children), rest
    text = neighbour.text
    if leading and text.startswith("/"):
        children, text = (*children, Literal("/")), text[1:]
    elif not leading and text.endswith("/"):
        children, text = (Literal("/"), *children), text[:-1]
    else:
        return OptionalSegment(children), rest

    remaining = (Literal(text),) if text else ()
    rest = (*remaining, *rest[1:]) if leading else (*rest[:-1], *remaining)
    return OptionalSegment(children), rest
