"""Gradio window construction."""

from __future__ import annotations

from typing import Any, NamedTuple, Optional

import gradio as gr
from loguru import logger

from declarative_ui_engine.core.context import Context
from declarative_ui_engine.core.engine import Engine
from declarative_ui_engine.core.widget_tree import (
    ButtonNode,
    ContainerNode,
    DrawCall,
    LabelNode,
    RecordingSurface,
    TextInputNode,
    WidgetNode,
)
from declarative_ui_engine.window.session_state import SessionState
from declarative_ui_engine.window.wiring import wire_handlers


class WindowUI(NamedTuple):
    """Components of a built window, in tree order."""

    state: gr.State
    outputs: list[Any]  # one component per non-container node
    textboxes: dict[str, gr.Textbox]
    buttons: dict[str, gr.Button]
    reload_btn: gr.Button


def _initial_calls(engine: Engine) -> list[DrawCall]:
    """Draw calls of a frame with no input, used for initial component values."""
    preview = RecordingSurface()
    # a throwaway copy so the session's first real frame is frame 1
    Engine(engine.config, context=Context(engine.context.snapshot())).frame(preview)
    return [c for c in preview.calls if c.kind != "container"]


def _build_node(
    node: WidgetNode,
    initial: list[DrawCall],
    outputs: list[Any],
    textboxes: dict[str, gr.Textbox],
    buttons: dict[str, gr.Button],
) -> None:
    if isinstance(node, ContainerNode):
        layout = gr.Row() if node.direction == "horizontal" else gr.Column()
        with layout:
            for child in node.children:
                _build_node(child, initial, outputs, textboxes, buttons)
        return

    text = initial[len(outputs)].text
    component: Any
    if isinstance(node, LabelNode):
        # plain text: bound and templated labels echo what users typed
        component = gr.Textbox(
            value=text,
            interactive=False,
            show_label=False,
            container=False,
            lines=1,
            elem_id=node.name,
            elem_classes=["dui-label"],
        )
    elif isinstance(node, TextInputNode):
        component = gr.Textbox(
            value=text,
            placeholder=node.placeholder,
            show_label=False,
            lines=1,
            max_lines=1,
            elem_id=node.name,
        )
        textboxes[node.name] = component
    elif isinstance(node, ButtonNode):
        component = gr.Button(value=text, elem_id=node.name)
        buttons[node.name] = component
    else:
        raise TypeError(f"Unsupported widget node: {node!r}")
    outputs.append(component)


def build_window(engine: Engine, banner: Optional[str] = None) -> gr.Blocks:
    """Build the gradio Blocks for an engine's widget tree."""
    config = engine.config
    logger.info(f"Building window for app '{config.name}'")
    initial = _initial_calls(engine)

    window = gr.Blocks(title=config.title)
    with window:
        state = gr.State(value=SessionState(engine=engine, last_actions=[]))

        if banner:
            gr.HTML(f'<div style="text-align:center" id="banner">{banner}</div>')

        outputs: list[Any] = []
        textboxes: dict[str, gr.Textbox] = {}
        buttons: dict[str, gr.Button] = {}
        with gr.Column():
            _build_node(config.root, initial, outputs, textboxes, buttons)

        with gr.Row():
            reload_btn = gr.Button("Reload config", variant="secondary", size="sm")

        wire_handlers(
            WindowUI(
                state=state,
                outputs=outputs,
                textboxes=textboxes,
                buttons=buttons,
                reload_btn=reload_btn,
            )
        )

    return window
