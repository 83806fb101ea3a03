"""Wiring of event handlers to window components."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

from declarative_ui_engine.window.handlers import handle_frame, handle_reload

if TYPE_CHECKING:
    from declarative_ui_engine.window.window import WindowUI


def wire_handlers(ui: WindowUI) -> None:
    """Wire every input event to a one-frame handler."""
    input_names = list(ui.textboxes)
    inputs = [ui.state, *ui.textboxes.values()]
    outputs = [ui.state, *ui.outputs]

    # .input fires on user edits only, not on the updates a frame sends back
    for name, textbox in ui.textboxes.items():
        textbox.input(
            fn=partial(handle_frame, input_names=input_names, edited=name),
            inputs=inputs,
            outputs=outputs,
        )

    for name, button in ui.buttons.items():
        button.click(
            fn=partial(handle_frame, input_names=input_names, clicked=name),
            inputs=inputs,
            outputs=outputs,
        )

    ui.reload_btn.click(
        fn=partial(handle_reload, input_names=input_names),
        inputs=inputs,
        outputs=outputs,
    )
