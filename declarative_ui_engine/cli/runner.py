"""Console host: runs an app's frames in the terminal with rich."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Mapping, Optional, Union

from loguru import logger
from rich.columns import Columns
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from declarative_ui_engine.cli.configuration import load_theme
from declarative_ui_engine.core.engine import Engine
from declarative_ui_engine.core.errors import ConfigParseError
from declarative_ui_engine.core.widget_tree import (
    ButtonNode,
    RecordingSurface,
    TextInputNode,
    iter_nodes,
)
from declarative_ui_engine.core.widget_tree.surface import Direction

HELP = (
    "Type `field=text` to edit a field, a button name to click it, "
    "`:reload` to reload the config, or press Enter to quit."
)


class ConsoleSurface(RecordingSurface):
    """Recording surface that also builds a rich renderable of the frame."""

    def __init__(
        self,
        theme: dict,
        edits: Optional[Mapping[str, str]] = None,
        clicks: Optional[Iterable[str]] = None,
    ) -> None:
        super().__init__(edits=edits, clicks=clicks)
        self.theme = theme
        self._stack: list[list[RenderableType]] = [[]]

    def label(self, name: Optional[str], text: str) -> None:
        super().label(name, text)
        self._stack[-1].append(Text(text, style=self.theme["label"]))

    def text_input(self, name: str, value: str, placeholder: str) -> Optional[str]:
        edited = super().text_input(name, value, placeholder)
        shown = value if edited is None else edited
        field = Text(f"{name}: [", style=self.theme["label"])
        if shown:
            field.append(shown, style=self.theme["input"])
        else:
            field.append(placeholder, style=self.theme["placeholder"])
        field.append("]")
        self._stack[-1].append(field)
        return edited

    def button(self, name: str, caption: str) -> bool:
        clicked = super().button(name, caption)
        self._stack[-1].append(Text(f"< {caption} >", style=self.theme["button"]))
        return clicked

    @contextmanager
    def container(self, name: Optional[str], direction: Direction) -> Iterator[None]:
        self._stack.append([])
        try:
            with super().container(name, direction):
                yield
        finally:
            children = self._stack.pop()
            if direction == "horizontal":
                self._stack[-1].append(Columns(children))
            else:
                self._stack[-1].append(Group(*children))

    def renderable(self) -> RenderableType:
        """Everything drawn this frame."""
        return Group(*self._stack[0])


def _parse_command(
    command: str, inputs: set[str], buttons: set[str]
) -> tuple[dict[str, str], set[str], Optional[str]]:
    """Turn one prompt line into (edits, clicks, problem)."""
    if "=" in command:
        name, value = command.split("=", 1)
        name = name.strip()
        if name in inputs:
            return {name: value}, set(), None
        return {}, set(), f"No text field named '{name}'."
    if command in buttons:
        return {}, {command}, None
    return {}, set(), f"Unknown command '{command}'. {HELP}"


def run_console(
    app: Union[str, Path],
    version: str = "latest",
    custom_theme_path: Optional[str] = None,
    console: Optional[Console] = None,
) -> Engine:
    """Run the console interaction loop; returns the engine after the user quits."""
    console = console or Console()
    theme = load_theme(custom_theme_path)

    try:
        engine = Engine.create(app, version=version)
    except ConfigParseError as e:
        console.print(f"Failed to load app config: {e}", style=theme["error"])
        logger.exception(f"Failed to load app config with error: {e}")
        raise

    console.rule(engine.config.title, style=theme["intro"])
    console.print(HELP, style=theme["info"])

    edits: dict[str, str] = {}
    clicks: set[str] = set()
    while True:
        surface = ConsoleSurface(theme, edits=edits, clicks=clicks)
        actions = engine.frame(surface)

        console.print()
        console.print(Panel(surface.renderable(), title=engine.config.title))
        for action in actions:
            console.print(f"'{action.name}' clicked", style=theme["info"])

        console.print("command?", style=theme["user-prompt"], end=" ")
        command = console.input().strip()
        edits, clicks = {}, set()

        if not command or command in {":q", ":quit"}:
            break

        if command == ":reload":
            try:
                engine.reload()
                console.print("Config reloaded.", style=theme["info"])
            except (ConfigParseError, ValueError) as e:
                logger.error(f"Reload failed; keeping current config: {e}")
                console.print(f"Reload failed: {e}", style=theme["error"])
            continue

        nodes = list(iter_nodes(engine.root))
        inputs = {n.name for n in nodes if isinstance(n, TextInputNode)}
        buttons = {n.name for n in nodes if isinstance(n, ButtonNode)}
        edits, clicks, problem = _parse_command(command, inputs, buttons)
        if problem:
            console.print(problem, style=theme["warning"])

    console.rule(f"Closed after {engine.frames} frames", style=theme["outtro"])
    return engine
