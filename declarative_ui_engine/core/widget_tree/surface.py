"""Host toolkit surface used by the renderer.

A Surface is the immediate-mode drawing API of a host toolkit: one call per
widget per frame, each returning what the user did to that widget since the
last frame. Hosts (gradio window, rich console) and tests implement it.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import (
    ContextManager,
    Iterable,
    Iterator,
    Literal,
    Mapping,
    NamedTuple,
    Optional,
    Protocol,
)

Direction = Literal["vertical", "horizontal"]


class Surface(Protocol):
    """Drawing primitives the renderer calls, one per widget kind."""

    def label(self, name: Optional[str], text: str) -> None:
        """Draw a line of text."""
        ...

    def text_input(self, name: str, value: str, placeholder: str) -> Optional[str]:
        """Draw a text field showing `value`; return the new text if edited."""
        ...

    def button(self, name: str, caption: str) -> bool:
        """Draw a button; return True if it was activated this frame."""
        ...

    def container(
        self, name: Optional[str], direction: Direction
    ) -> ContextManager[None]:
        """Context manager grouping the widgets drawn inside it."""
        ...


class DrawCall(NamedTuple):
    """One primitive emitted during a frame."""

    kind: str
    name: Optional[str]
    text: str
    depth: int


class RecordingSurface:
    """In-memory surface fed with scripted input for one frame.

    `edits` maps text-input names to the text the user typed; `clicks` holds
    the names of buttons activated this frame. Everything drawn is appended to
    `calls`, so a frame can be inspected without a live window.
    """

    def __init__(
        self,
        edits: Optional[Mapping[str, str]] = None,
        clicks: Optional[Iterable[str]] = None,
    ) -> None:
        self.edits = dict(edits or {})
        self.clicks = set(clicks or ())
        self.calls: list[DrawCall] = []
        self._depth = 0

    def label(self, name: Optional[str], text: str) -> None:
        self.calls.append(DrawCall("label", name, text, self._depth))

    def text_input(self, name: str, value: str, placeholder: str) -> Optional[str]:
        edited = self.edits.get(name)
        # an "edit" that leaves the text unchanged is not reported
        if edited is not None and edited == value:
            edited = None
        shown = value if edited is None else edited
        self.calls.append(DrawCall("text_input", name, shown, self._depth))
        return edited

    def button(self, name: str, caption: str) -> bool:
        self.calls.append(DrawCall("button", name, caption, self._depth))
        return name in self.clicks

    @contextmanager
    def container(self, name: Optional[str], direction: Direction) -> Iterator[None]:
        self.calls.append(DrawCall("container", name, direction, self._depth))
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    # ---------- inspection helpers ----------
    def texts(self, kind: Optional[str] = None) -> list[str]:
        """Texts of recorded calls, optionally of one kind only."""
        return [c.text for c in self.calls if kind is None or c.kind == kind]

    def by_name(self) -> dict[str, DrawCall]:
        """Recorded calls of named widgets, keyed by widget name."""
        return {c.name: c for c in self.calls if c.name is not None}
