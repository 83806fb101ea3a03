"""Per-session state for the gradio window."""

from typing import TypedDict

from declarative_ui_engine.core.engine import Engine


class SessionState(TypedDict, total=False):
    """Custom state stored in gr.State; gradio copies it for each browser session."""

    engine: Engine
    last_actions: list[str]
