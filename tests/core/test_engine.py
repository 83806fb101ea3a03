"""Tests for the Engine frame loop and reload."""

from pathlib import Path
from typing import Callable

import pytest

from declarative_ui_engine.core.app_config import AppConfig, load_app_config
from declarative_ui_engine.core.context import Context
from declarative_ui_engine.core.engine import Engine
from declarative_ui_engine.core.errors import ConfigParseError
from declarative_ui_engine.core.widget_tree import ContainerNode, RecordingSurface
from tests.helpers import patch_yml


@pytest.fixture
def engine(counter_yml_path: Path) -> Engine:
    """Engine over the reference app, loaded from a file so it can reload."""
    return Engine.create(counter_yml_path)


@pytest.mark.unit
def test_create_from_path_seeds_context(engine: Engine, counter_yml_path: Path) -> None:
    """The context starts from the config's declared values."""
    assert engine.source == counter_yml_path.resolve()
    assert engine.context == {"your_name": "", "counter": 0}
    assert engine.frames == 0
    assert isinstance(engine.root, ContainerNode)


@pytest.mark.unit
def test_create_from_config_and_bundled_name(counter_yml_path: Path) -> None:
    """Configs are used as-is; names resolve against the bundled apps."""
    cfg = load_app_config(counter_yml_path)
    assert Engine.create(cfg).config is cfg

    bundled = Engine.create("counter")
    assert bundled.config.name == "counter"
    assert bundled.source is not None


@pytest.mark.unit
def test_create_rejects_other_types() -> None:
    """Only names, paths and configs describe an app."""
    with pytest.raises(TypeError):
        Engine.create(42)  # type: ignore[arg-type]


@pytest.mark.unit
def test_create_propagates_parse_errors(write_yaml: Callable[[str, str], Path]) -> None:
    """A broken file fails engine creation with a parse error."""
    path = write_yaml("broken.yml", "name: broken\nroot: [oops\n")
    with pytest.raises(ConfigParseError):
        Engine.create(path)


@pytest.mark.unit
def test_frame_applies_actions(engine: Engine) -> None:
    """Clicks become actions which are applied before the frame returns."""
    actions = engine.frame(RecordingSurface(clicks={"inc"}))
    assert [a.name for a in actions] == ["inc"]
    assert engine.context.get_counter("counter") == 1

    engine.frame(RecordingSurface(clicks={"inc"}))
    assert engine.context.get_counter("counter") == 2
    assert engine.frames == 2


@pytest.mark.unit
def test_frames_carry_state_forward(engine: Engine) -> None:
    """Typed text shows up in the next frame's field."""
    engine.frame(RecordingSurface(edits={"your_name": "World"}))
    surface = RecordingSurface()
    engine.frame(surface)
    assert surface.by_name()["your_name"].text == "World"


@pytest.mark.unit
def test_reload_swaps_tree_and_keeps_values(
    engine: Engine, counter_yml_path: Path
) -> None:
    """Reloading replaces the tree; existing values stay, new names get defaults."""
    engine.frame(RecordingSurface(edits={"your_name": "World"}, clicks={"inc"}))

    counter_yml_path.write_text(
        counter_yml_path.read_text(encoding="utf-8").replace("Hello", "Goodbye")
        + "  direction: horizontal\n",
        encoding="utf-8",
    )
    patched = patch_yml(counter_yml_path, "context:\n  visits: 0\n", suffix="v2")

    new_cfg = engine.reload(patched.path)

    assert engine.config is new_cfg
    assert engine.source == patched.path
    assert engine.context.snapshot() == {"your_name": "World", "counter": 1, "visits": 0}
    surface = RecordingSurface()
    engine.frame(surface)
    assert surface.by_name()["greeting"].text == "Goodbye"
    assert surface.calls[0].text == "horizontal"


@pytest.mark.unit
def test_reload_from_own_source(engine: Engine, counter_yml_path: Path) -> None:
    """Without an argument the engine re-reads the file it came from."""
    counter_yml_path.write_text(
        counter_yml_path.read_text(encoding="utf-8").replace("Increment", "Add one"),
        encoding="utf-8",
    )
    engine.reload()
    surface = RecordingSurface()
    engine.frame(surface)
    assert surface.by_name()["inc"].text == "Add one"


@pytest.mark.unit
def test_failed_reload_keeps_current_tree(
    engine: Engine, write_yaml: Callable[[str, str], Path]
) -> None:
    """A parse failure leaves the running tree and context untouched."""
    before = engine.config
    broken = write_yaml("broken.yml", "name: broken\nroot:\n  kind: slider\n")

    with pytest.raises(ConfigParseError):
        engine.reload(broken)

    assert engine.config is before
    assert engine.context == {"your_name": "", "counter": 0}


@pytest.mark.unit
def test_reload_without_source_is_an_error(counter_yml_path: Path) -> None:
    """An engine built from an in-memory config has nothing to re-read."""
    engine = Engine(load_app_config(counter_yml_path), context=Context())
    with pytest.raises(ValueError):
        engine.reload()


@pytest.mark.unit
def test_reload_from_text(engine: Engine) -> None:
    """YAML text is accepted as a reload source too."""
    cfg = engine.reload("name: tiny\nroot:\n  kind: label\n  text: Tiny\n")
    assert isinstance(cfg, AppConfig)
    surface = RecordingSurface()
    engine.frame(surface)
    assert surface.texts() == ["Tiny"]


@pytest.mark.unit
def test_click_on_string_slot_after_reload_is_skipped(loguru_messages) -> None:
    """Kept values win over a new tree's targets; the click is logged, not raised."""
    engine = Engine(
        load_app_config(
            "name: first\ncontext:\n  x: ''\nroot:\n  kind: label\n  bind: x\n"
        )
    )
    engine.reload(
        "name: second\n"
        "root:\n"
        "  kind: container\n"
        "  children:\n"
        "    - kind: button\n"
        "      name: inc\n"
        "      caption: +\n"
        "      on_click: { op: increment, target: x }\n"
        "    - kind: button\n"
        "      name: more\n"
        "      caption: ++\n"
        "      on_click: { op: increment, target: y }\n"
    )

    actions = engine.frame(RecordingSurface(clicks={"inc", "more"}))

    assert [a.name for a in actions] == ["inc", "more"]
    assert engine.context.snapshot() == {"x": "", "y": 1}
    assert engine.frames == 1
    assert any("Skipping the click on 'inc'" in m for m in loguru_messages())
