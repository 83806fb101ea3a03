"""Exception types raised by the declarative UI engine."""

from __future__ import annotations

from typing import Optional


class DeclarativeUIError(Exception):
    """Base class for all engine errors."""


class ConfigParseError(DeclarativeUIError, ValueError):
    """The app config could not be read, parsed or validated.

    Startup-fatal: there is nothing sensible to render without a valid tree.
    """


class UnknownWidgetKind(ConfigParseError):
    """A widget node declares a kind outside the supported set."""

    def __init__(self, kind: object, location: Optional[str] = None) -> None:
        self.kind = kind
        self.location = location
        where = f" at `{location}`" if location else ""
        super().__init__(
            f"Unknown widget kind {kind!r}{where}. "
            "Allowed kinds: label, text_input, button, container."
        )


class TypeMismatch(DeclarativeUIError, TypeError):
    """A context slot was read or written as the wrong kind of value."""

    def __init__(self, name: str, expected: str, actual: str) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Context slot '{name}' holds a {actual}, not a {expected}."
        )
