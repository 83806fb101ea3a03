"""Mutable named-value store read and written by the renderer."""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Optional, Union

from loguru import logger

from declarative_ui_engine.core.constants import (
    COUNTER_KIND,
    COUNTER_ZERO,
    STRING_KIND,
    STRING_ZERO,
)
from declarative_ui_engine.core.errors import TypeMismatch
from declarative_ui_engine.core.widget_tree.actions import Action

Value = Union[str, int]


def kind_of(value: Any) -> str:
    """Return the slot kind for a value, or raise TypeError if it has none."""
    # bool is an int subclass but never a counter
    if isinstance(value, bool):
        raise TypeError(f"Context values must be strings or integers, got {value!r}")
    if isinstance(value, str):
        return STRING_KIND
    if isinstance(value, int):
        return COUNTER_KIND
    raise TypeError(
        f"Context values must be strings or integers, got {type(value).__name__}"
    )


class Context:
    """Named string values and counters, owned by a single UI thread.

    A slot's kind is fixed by the first value stored under its name. Reads of
    missing names return the kind's zero value; reads or writes of the wrong
    kind raise TypeMismatch.
    """

    def __init__(self, values: Optional[Mapping[str, Value]] = None) -> None:
        self._values: dict[str, Value] = {}
        for name, value in (values or {}).items():
            kind_of(value)
            self._values[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Context):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Context({self._values!r})"

    def get(self, name: str, default: Optional[Value] = None) -> Optional[Value]:
        """Raw value under `name` regardless of kind."""
        return self._values.get(name, default)

    # ---------- kind-checked access ----------
    def get_string(self, name: str) -> str:
        """Return the string under `name` ("" if missing)."""
        value = self._values.get(name, STRING_ZERO)
        if kind_of(value) != STRING_KIND:
            raise TypeMismatch(name, expected=STRING_KIND, actual=COUNTER_KIND)
        return str(value)

    def get_counter(self, name: str) -> int:
        """Return the counter under `name` (0 if missing)."""
        value = self._values.get(name, COUNTER_ZERO)
        if kind_of(value) != COUNTER_KIND:
            raise TypeMismatch(name, expected=COUNTER_KIND, actual=STRING_KIND)
        return int(value)

    def set_string(self, name: str, value: str) -> None:
        """Store a string under `name`."""
        self._check_write(name, STRING_KIND)
        self._values[name] = str(value)

    def set_counter(self, name: str, value: int) -> None:
        """Store a counter under `name`."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Counter '{name}' must be an integer, got {value!r}")
        self._check_write(name, COUNTER_KIND)
        self._values[name] = value

    def _check_write(self, name: str, kind: str) -> None:
        if name in self._values:
            actual = kind_of(self._values[name])
            if actual != kind:
                raise TypeMismatch(name, expected=kind, actual=actual)

    def display(self, name: str) -> str:
        """Current value of any kind as display text ("" if missing)."""
        if name not in self._values:
            logger.debug(f"Context slot '{name}' missing; displaying empty string")
            return STRING_ZERO
        return str(self._values[name])

    # ---------- handlers ----------
    def apply(self, action: Action) -> None:
        """Apply a button activation to the context.

        Not idempotent: each action is one click, so repeating it repeats the
        mutation.
        """
        handler = action.handler
        if handler is None:
            logger.debug(f"Button '{action.name}' has no on_click handler; ignoring")
            return

        current = self.get_counter(handler.target)
        if handler.op == "increment":
            updated = current + handler.amount
        elif handler.op == "decrement":
            updated = current - handler.amount
        else:  # reset
            updated = COUNTER_ZERO
        self.set_counter(handler.target, updated)
        logger.debug(
            f"Button '{action.name}' applied {handler.op} to '{handler.target}': "
            f"{current} -> {updated}"
        )

    # ---------- whole-context helpers ----------
    def snapshot(self) -> dict[str, Value]:
        """Return a copy of all values."""
        return dict(self._values)

    def merge_defaults(self, defaults: Mapping[str, Value]) -> list[str]:
        """Add defaults for names not present yet; returns the names added."""
        added = []
        for name, value in defaults.items():
            if name in self._values:
                continue
            kind_of(value)
            self._values[name] = value
            added.append(name)
        return added
