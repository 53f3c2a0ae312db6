"""Matcher configuration.

MatcherConfig is a frozen dataclass: immutable after creation, hashable
(so it can key the compiled-route cache), no string-key dict lookups.
"""

import re
from dataclasses import dataclass

from wayfinder.errors import ConfigurationError
from wayfinder.routing.params import DEFAULT_SEGMENT


@dataclass(frozen=True, slots=True)
class MatcherConfig:
    """Compilation, matching and building options. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = MatcherConfig(case_sensitive=True, strict_values=True)
    """

    # Body of a placeholder's capture group when no constraint is given
    default_segment: str = DEFAULT_SEGMENT

    # Matching
    case_sensitive: bool = False

    # Building: raise UnrepresentableValueError instead of substituting ""
    strict_values: bool = False

    def __post_init__(self) -> None:
        if not self.default_segment:
            msg = "default_segment must be a non-empty regular expression."
            raise ConfigurationError(msg)
        try:
            re.compile(self.default_segment)
        except re.error as exc:
            msg = (
                f"default_segment {self.default_segment!r} is not a valid "
                f"regular expression: {exc}"
            )
            raise ConfigurationError(msg) from exc

    @property
    def regex_flags(self) -> re.RegexFlag:
        """Flags used to compile match patterns."""
        if self.case_sensitive:
            return re.UNICODE
        return re.IGNORECASE | re.UNICODE


DEFAULT_CONFIG = MatcherConfig()
