"""Engine that owns one app's widget tree and context across frames."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from loguru import logger

from declarative_ui_engine.core.app_config import AppConfig, load_app_config
from declarative_ui_engine.core.context import Context
from declarative_ui_engine.core.errors import TypeMismatch
from declarative_ui_engine.core.widget_tree import (
    Action,
    Surface,
    WidgetNode,
    render_frame,
)
from declarative_ui_engine.helpers.app_helpers import get_app_config


class Engine:
    """Runs frames of a config-defined UI against a host surface.

    The host's event loop calls `frame` once per redraw from its single UI
    thread. `reload` swaps in a freshly loaded config between frames.
    """

    def __init__(
        self,
        config: AppConfig,
        context: Optional[Context] = None,
        source: Optional[Path] = None,
    ) -> None:
        self.config = config
        self.context = context if context is not None else Context(
            config.default_context()
        )
        self.source = source
        self.frames = 0

    @classmethod
    def create(
        cls, app: Union[str, Path, AppConfig], version: str = "latest"
    ) -> "Engine":
        """Create an engine from a bundled app name, a YAML path or a config."""
        logger.debug(f"Engine.create called with app={app}")
        if isinstance(app, AppConfig):
            return cls(app)
        if isinstance(app, str):
            path = Path(get_app_config(app, version=version)).resolve()
        elif isinstance(app, Path):
            path = app.resolve()
        else:
            raise TypeError("Invalid app parameter type.")

        try:
            config = load_app_config(path)
        except Exception as e:
            logger.error(f"Loading app config from {path} failed: {e}")
            raise
        return cls(config, source=path)

    @property
    def root(self) -> WidgetNode:
        """Root node of the current widget tree."""
        return self.config.root

    def frame(self, surface: Surface) -> list[Action]:
        """Render one frame and apply the actions it produced, in order.

        An action whose target slot holds a string is logged and skipped; the
        rest of the frame's actions still apply.
        """
        actions = render_frame(self.config.root, self.context, surface)
        for action in actions:
            try:
                self.context.apply(action)
            except TypeMismatch as e:
                logger.warning(f"{e} Skipping the click on '{action.name}'.")
        self.frames += 1
        return actions

    def reload(self, source: Union[str, bytes, Path, AppConfig, None] = None) -> AppConfig:
        """Replace the whole widget tree with a freshly loaded config.

        The new config is loaded completely before anything changes, so a
        failed reload raises and leaves the current tree in place. Existing
        context values are kept; defaults for new names are added.
        """
        if source is None:
            if self.source is None:
                raise ValueError("Engine has no config source to reload from.")
            source = self.source

        new_config = load_app_config(source)
        self.config = new_config
        if isinstance(source, Path):
            self.source = source

        added = self.context.merge_defaults(new_config.default_context())
        logger.info(
            f"Reloaded app '{new_config.name}' v{new_config.version}; "
            f"new context names: {added or 'none'}"
        )
        return new_config
