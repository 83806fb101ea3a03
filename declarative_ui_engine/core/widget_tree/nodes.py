"""Widget node models for the declarative widget tree.

The tree is a closed tagged union over four node kinds, selected by the
`kind` key of each YAML mapping:

- label:      static text, a bound context slot, or a format template
- text_input: a single-line text field bound to a string slot
- button:     a caption plus an optional click handler on a counter slot
- container:  an ordered list of child nodes laid out vertically or
              horizontally

All node models are frozen; a loaded tree is never patched in place.
"""

from __future__ import annotations

import string
from typing import Annotated, Iterator, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from declarative_ui_engine.core.constants import NAME_PATTERN

Name = Annotated[str, Field(pattern=NAME_PATTERN)]


class _Node(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class ClickHandler(BaseModel):
    """What a button does to a counter slot when it is activated."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    op: Literal["increment", "decrement", "reset"]
    target: Name
    amount: int = Field(default=1, ge=1)


class LabelNode(_Node):
    """Displays text; reads the context but never writes it."""

    kind: Literal["label"] = "label"
    name: Optional[Name] = None
    text: str = ""
    bind: Optional[Name] = None
    template: Optional[str] = None

    @field_validator("template")
    @classmethod
    def _template_fields_are_names(cls, v: Optional[str]) -> Optional[str]:
        """Template fields must be plain context names, e.g. 'Hi {your_name}'."""
        if v is None:
            return v
        try:
            parsed = list(string.Formatter().parse(v))
        except ValueError as e:
            raise ValueError(f"Malformed template {v!r}: {e}") from e
        for _, field, _, _ in parsed:
            if field is None:
                continue
            if not field.isidentifier():
                raise ValueError(
                    f"Template field {{{field}}} must be a context name "
                    "(letters, digits and underscores)."
                )
        return v

    @model_validator(mode="after")
    def _one_text_source(self) -> "LabelNode":
        if self.bind is not None and self.template is not None:
            raise ValueError("A label takes either 'bind' or 'template', not both.")
        return self

    def template_fields(self) -> list[str]:
        """Context names referenced by the template, in order of appearance."""
        if self.template is None:
            return []
        return [f for _, f, _, _ in string.Formatter().parse(self.template) if f]


class TextInputNode(_Node):
    """A text field whose value lives in a string slot of the context."""

    kind: Literal["text_input"] = "text_input"
    name: Name
    bind: Optional[Name] = None
    placeholder: str = ""
    default: str = ""

    @property
    def slot(self) -> str:
        """The context name this field reads and writes."""
        return self.bind or self.name


class ButtonNode(_Node):
    """A push button; activations become Actions."""

    kind: Literal["button"] = "button"
    name: Name
    caption: str
    on_click: Optional[ClickHandler] = None


class ContainerNode(_Node):
    """Owns an ordered sequence of children; order is layout order."""

    kind: Literal["container"] = "container"
    name: Optional[Name] = None
    direction: Literal["vertical", "horizontal"] = "vertical"
    children: tuple[WidgetNode, ...] = ()


WidgetNode = Annotated[
    Union[LabelNode, TextInputNode, ButtonNode, ContainerNode],
    Field(discriminator="kind"),
]

ContainerNode.model_rebuild()


def iter_nodes(node: WidgetNode) -> Iterator[WidgetNode]:
    """Yield `node` and all of its descendants, depth-first in declared order."""
    yield node
    if isinstance(node, ContainerNode):
        for child in node.children:
            yield from iter_nodes(child)
