"""Wayfinder exception hierarchy.

Shared across the parser, compiler, matcher and builder so every module
raises and catches the same types. A pattern that does not match is not
an error: ``match`` returns ``None`` and the caller tries the next route.
"""

from typing import Any


class WayfinderError(Exception):
    """Base for all wayfinder-specific errors."""


class ConfigurationError(WayfinderError):
    """Raised when a ``MatcherConfig`` is invalid.

    Typically surfaces at import or startup, when the config is created.
    """


class MalformedPatternError(WayfinderError, ValueError):
    """A route template cannot be compiled.

    Raised for unbalanced ``[``/``]``, unterminated or invalid placeholders,
    and constraints that are not valid regular expressions. Fatal to the
    registration of that route.
    """

    def __init__(self, message: str, pattern: str = "", position: int | None = None) -> None:
        self.message = message
        self.pattern = pattern
        self.position = position
        super().__init__(message)

    def __str__(self) -> str:
        if self.position is None:
            return f"{self.message} in pattern {self.pattern!r}"
        return f"{self.message} at position {self.position} in pattern {self.pattern!r}"


class UnrepresentableValueError(WayfinderError, TypeError):
    """A value passed to ``build`` has no textual representation.

    Only raised when ``MatcherConfig.strict_values`` is enabled; the
    default policy substitutes an empty string instead.
    """

    def __init__(self, name: str, value: Any) -> None:
        self.name = name
        self.value = value
        super().__init__(
            f"Value for {name!r} of type {type(value).__name__} cannot be converted to text"
        )
