"""Actions emitted by buttons during a render pass."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from declarative_ui_engine.core.widget_tree.nodes import ButtonNode, ClickHandler


class Action(BaseModel):
    """A button named `name` was activated this frame.

    Ephemeral: produced by the renderer, consumed by `Context.apply`.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    handler: Optional[ClickHandler] = None

    @classmethod
    def from_button(cls, button: ButtonNode) -> "Action":
        """Build the action for an activation of `button`."""
        return cls(name=button.name, handler=button.on_click)
