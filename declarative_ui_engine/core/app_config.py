"""App config module: the YAML document describing one window."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Dict, List, Optional, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, model_validator

from declarative_ui_engine.core.constants import (
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    WIDGET_KINDS,
)
from declarative_ui_engine.core.errors import UnknownWidgetKind
from declarative_ui_engine.core.widget_tree import (
    ButtonNode,
    LabelNode,
    TextInputNode,
    WidgetNode,
    iter_nodes,
)
from declarative_ui_engine.utils.serde import SerdeMixin

VersionStr = Annotated[
    str,
    Field(
        pattern=(
            r"^(0|[1-9]\d*)\."
            r"(0|[1-9]\d*)\."
            r"(0|[1-9]\d*)"
            r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
            r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
        )
    ),
]

# strict so YAML `true` is rejected instead of becoming 1
ContextValue = Union[StrictInt, StrictStr]


class WindowSettings(BaseModel):
    """Native window settings passed to the host."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    title: Optional[str] = None
    width: int = Field(default=DEFAULT_WINDOW_WIDTH, gt=0)
    height: int = Field(default=DEFAULT_WINDOW_HEIGHT, gt=0)


class AppConfig(SerdeMixin, BaseModel):
    """Top-level configuration for an app: metadata, defaults and widget tree."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Metadata
    name: str
    description: str = ""
    version: VersionStr = "0.1.0"
    authors: List[str] = Field(default_factory=list)

    window: WindowSettings = Field(default_factory=WindowSettings)

    # Initial values of named context slots
    context: Dict[str, ContextValue] = Field(default_factory=dict)

    root: WidgetNode

    @property
    def title(self) -> str:
        """Window title; falls back to the app name."""
        return self.window.title or self.name

    @model_validator(mode="after")
    def _check_tree(self) -> "AppConfig":
        """Names are unique and bindings agree with the declared slot kinds."""
        seen: set[str] = set()
        for node in iter_nodes(self.root):
            if node.name is None:
                continue
            if node.name in seen:
                raise ValueError(f"Duplicate widget name '{node.name}'.")
            seen.add(node.name)

        # kinds the slots will actually start with, declared or implied
        initial = self.default_context()
        for node in iter_nodes(self.root):
            if isinstance(node, TextInputNode):
                if isinstance(initial.get(node.slot), int):
                    raise ValueError(
                        f"Text input '{node.name}' binds to '{node.slot}', "
                        "which holds a counter."
                    )
            elif isinstance(node, ButtonNode) and node.on_click is not None:
                target = node.on_click.target
                if isinstance(initial.get(target), str):
                    raise ValueError(
                        f"Button '{node.name}' targets '{target}', "
                        "which holds a string."
                    )
        return self

    @classmethod
    def _check_raw(cls, data: dict[str, Any]) -> None:
        """Reject unknown widget kinds before pydantic validation."""
        if "root" in data:
            _check_kinds(data["root"], "root")

    def default_context(self) -> dict[str, Union[str, int]]:
        """Initial context values for this app.

        Declared `context` values win; otherwise text inputs contribute their
        `default` and click-handler targets start at zero.
        """
        values: dict[str, Union[str, int]] = dict(self.context)
        for node in iter_nodes(self.root):
            if isinstance(node, TextInputNode):
                values.setdefault(node.slot, node.default)
            elif isinstance(node, ButtonNode) and node.on_click is not None:
                values.setdefault(node.on_click.target, 0)
        return values

    def widget_names(self) -> list[str]:
        """Names of all named widgets, in tree order."""
        return [n.name for n in iter_nodes(self.root) if n.name is not None]

    def bound_names(self) -> set[str]:
        """Every context name referenced by a widget in the tree."""
        names: set[str] = set()
        for node in iter_nodes(self.root):
            if isinstance(node, LabelNode):
                if node.bind is not None:
                    names.add(node.bind)
                names.update(node.template_fields())
            elif isinstance(node, TextInputNode):
                names.add(node.slot)
            elif isinstance(node, ButtonNode) and node.on_click is not None:
                names.add(node.on_click.target)
        return names

    def unbound_names(self) -> set[str]:
        """Referenced names with no initial value (rendered as zero values)."""
        return self.bound_names() - set(self.default_context())


def _check_kinds(node: Any, location: str) -> None:
    if not isinstance(node, dict) or "kind" not in node:
        return  # shape errors are reported by validation
    kind = node["kind"]
    if kind not in WIDGET_KINDS:
        raise UnknownWidgetKind(kind, location)
    if kind == "container":
        children = node.get("children") or []
        if isinstance(children, list):
            for i, child in enumerate(children):
                _check_kinds(child, f"{location}.children.{i}")


def load_app_config(source: Union[str, bytes, Path, AppConfig]) -> AppConfig:
    """Load an AppConfig from a path, YAML text or byte buffer.

    Raises:
        ConfigParseError: the text is not well-formed or fails validation.
        UnknownWidgetKind: a node declares an unsupported kind.
    """
    if isinstance(source, AppConfig):
        return source
    config = AppConfig.from_yaml(source)
    logger.debug(
        f"Loaded app config '{config.name}' v{config.version} "
        f"with widgets {config.widget_names()}"
    )
    unbound = config.unbound_names()
    if unbound:
        logger.warning(
            f"App '{config.name}' references context names without defaults: "
            f"{sorted(unbound)}. They will render as empty values."
        )
    return config
