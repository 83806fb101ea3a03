"""Event handlers for the gradio window.

Every gradio event runs exactly one engine frame:

event → scripted RecordingSurface → engine.frame → draw calls → component updates
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

import gradio as gr
from loguru import logger

from declarative_ui_engine.core.app_config import load_app_config
from declarative_ui_engine.core.errors import ConfigParseError
from declarative_ui_engine.core.widget_tree import (
    ContainerNode,
    DrawCall,
    RecordingSurface,
    WidgetNode,
    iter_nodes,
)
from declarative_ui_engine.window.session_state import SessionState


def layout_signature(root: WidgetNode) -> tuple[tuple[str, Optional[str], str], ...]:
    """Shape of a tree as far as the gradio components are concerned."""
    return tuple(
        (
            node.kind,
            node.name,
            node.direction if isinstance(node, ContainerNode) else "",
        )
        for node in iter_nodes(root)
    )


def output_count(root: WidgetNode) -> int:
    """Number of components a frame updates (every non-container node)."""
    return sum(1 for node in iter_nodes(root) if not isinstance(node, ContainerNode))


def _updates(calls: Sequence[DrawCall], submitted: dict[str, str]) -> list[Any]:
    """Map recorded draw calls, in tree order, onto component values."""
    out: list[Any] = []
    for call in calls:
        if call.kind == "container":
            continue
        if call.kind == "text_input" and submitted.get(call.name or "") == call.text:
            # already what the user sees; rewriting it would move the cursor
            out.append(gr.update())
        else:
            out.append(call.text)
    return out


def handle_frame(
    state: SessionState,
    *field_values: str,
    input_names: Sequence[str] = (),
    edited: Optional[str] = None,
    clicked: Optional[str] = None,
) -> list[Any]:
    """Run one frame for a gradio event and return [state, *component updates].

    Only the textbox that fired the event (`edited`) reports an edit. The
    other fields' values are stale copies of the context and are ignored, so
    two fields bound to the same slot cannot overwrite each other.
    """
    engine = state["engine"]
    edits: dict[str, str] = {}
    if edited is not None:
        value = dict(zip(input_names, field_values)).get(edited)
        edits[edited] = "" if value is None else str(value)
    surface = RecordingSurface(edits=edits, clicks=[clicked] if clicked else [])
    actions = engine.frame(surface)
    state["last_actions"] = [a.name for a in actions]
    if actions:
        logger.debug(f"Frame {engine.frames} actions: {state['last_actions']}")
    return [state, *_updates(surface.calls, edits)]


def handle_reload(
    state: SessionState,
    *field_values: str,
    input_names: Sequence[str] = (),
) -> list[Any]:
    """Reload the config from disk between frames, then render a frame."""
    engine = state["engine"]
    unchanged = [state, *[gr.update() for _ in range(output_count(engine.root))]]

    if engine.source is None:
        gr.Warning("This window was not started from a config file.")
        return unchanged

    try:
        new_config = load_app_config(engine.source)
    except ConfigParseError as e:
        logger.error(f"Reload of {engine.source} failed; keeping current config: {e}")
        gr.Warning(f"Reload failed: {e}")
        return unchanged

    if layout_signature(new_config.root) != layout_signature(engine.root):
        logger.warning(
            f"Config {engine.source} changed the widget layout; "
            "restart the window to apply it."
        )
        gr.Warning("The widget layout changed. Restart the window to apply it.")
        return unchanged

    engine.reload(new_config)
    gr.Info("Config reloaded.")
    return handle_frame(state, *field_values, input_names=input_names)
