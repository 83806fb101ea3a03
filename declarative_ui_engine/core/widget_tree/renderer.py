"""Renderer: one depth-first walk of the widget tree per redraw.

The renderer is stateless between frames. Everything it knows comes from
the tree, the context and what the surface reports back; everything it
changes is written to the context (text edits) or returned (button
actions). A frame never aborts: missing or mismatched context slots are
rendered with the kind's zero value and logged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger
from typing_extensions import assert_never

from declarative_ui_engine.core.constants import STRING_ZERO
from declarative_ui_engine.core.errors import TypeMismatch
from declarative_ui_engine.core.widget_tree.actions import Action
from declarative_ui_engine.core.widget_tree.nodes import (
    ButtonNode,
    ContainerNode,
    LabelNode,
    TextInputNode,
    WidgetNode,
)
from declarative_ui_engine.core.widget_tree.surface import Surface

if TYPE_CHECKING:
    from declarative_ui_engine.core.context import Context


class _TemplateValues(dict):
    """format_map view over the context; unknown names render empty."""

    def __init__(self, context: Context) -> None:
        super().__init__()
        self._context = context

    def __missing__(self, key: str) -> object:
        value = self._context.get(key)
        if value is None:
            logger.debug(f"Template field '{key}' missing from context")
            return STRING_ZERO
        return value


def render_frame(root: WidgetNode, context: Context, surface: Surface) -> list[Action]:
    """Render `root` onto `surface` and return the actions triggered this frame.

    Text edits are written into `context` as they are reported; actions are
    returned in tree order for the caller to apply.
    """
    actions: list[Action] = []
    _render_node(root, context, surface, actions)
    return actions


def _render_node(
    node: WidgetNode, context: Context, surface: Surface, actions: list[Action]
) -> None:
    if isinstance(node, ContainerNode):
        with surface.container(node.name, node.direction):
            for child in node.children:
                _render_node(child, context, surface, actions)

    elif isinstance(node, LabelNode):
        surface.label(node.name, label_text(node, context))

    elif isinstance(node, TextInputNode):
        value = _read_string(context, node.slot)
        edited = surface.text_input(node.name, value, node.placeholder)
        if edited is not None:
            _write_string(context, node.slot, edited)

    elif isinstance(node, ButtonNode):
        if surface.button(node.name, node.caption):
            logger.debug(f"Button '{node.name}' activated")
            actions.append(Action.from_button(node))

    else:
        assert_never(node)


def label_text(node: LabelNode, context: Context) -> str:
    """Text a label shows for the current context."""
    if node.bind is not None:
        return context.display(node.bind)
    if node.template is not None:
        try:
            return node.template.format_map(_TemplateValues(context))
        except (ValueError, TypeError) as e:
            logger.warning(f"Label template {node.template!r} failed to format: {e}")
            return node.template
    return node.text


def _read_string(context: Context, name: str) -> str:
    try:
        return context.get_string(name)
    except TypeMismatch as e:
        logger.warning(f"{e} Rendering an empty field this frame.")
        return STRING_ZERO


def _write_string(context: Context, name: str, value: str) -> None:
    try:
        context.set_string(name, value)
    except TypeMismatch as e:
        logger.warning(f"{e} Dropping the edit {value!r}.")
