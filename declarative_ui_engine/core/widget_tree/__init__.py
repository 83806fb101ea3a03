"""Public API for the widget_tree subpackage."""

from .actions import Action
from .nodes import (
    ButtonNode,
    ClickHandler,
    ContainerNode,
    LabelNode,
    TextInputNode,
    WidgetNode,
    iter_nodes,
)
from .renderer import render_frame
from .surface import DrawCall, RecordingSurface, Surface

__all__ = [
    "Action",
    "ButtonNode",
    "ClickHandler",
    "ContainerNode",
    "DrawCall",
    "LabelNode",
    "RecordingSurface",
    "Surface",
    "TextInputNode",
    "WidgetNode",
    "iter_nodes",
    "render_frame",
]
