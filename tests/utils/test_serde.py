"""Tests for the YAML serde mixin."""

from pathlib import Path
from typing import Optional

import pytest
from pydantic import BaseModel, ConfigDict

from declarative_ui_engine.core.errors import ConfigParseError
from declarative_ui_engine.utils.serde import SerdeMixin


class _Inner(BaseModel):
    model_config = ConfigDict(extra="forbid")

    size: int


class _Doc(SerdeMixin, BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str
    inner: _Inner
    note: Optional[str] = None


@pytest.mark.unit
def test_to_yaml_keeps_key_order_and_drops_none() -> None:
    """Field order is preserved and unset optionals are left out."""
    doc = _Doc(title="t", inner=_Inner(size=2))
    text = doc.to_yaml()
    assert text.index("title") < text.index("inner")
    assert "note" not in text
    assert _Doc.from_yaml(text) == doc


@pytest.mark.unit
def test_save_and_load(tmp_path: Path) -> None:
    """save_yaml writes a file load_yaml reads back."""
    doc = _Doc(title="t", inner=_Inner(size=2), note="n")
    path = doc.save_yaml(tmp_path / "doc.yaml")
    assert path.exists()
    assert _Doc.load_yaml(str(path)) == doc


@pytest.mark.unit
def test_multiline_string_is_yaml_not_path() -> None:
    """Strings with newlines or without a YAML suffix are parsed as text."""
    assert _Doc.from_yaml("title: a.yml\ninner:\n  size: 1\n").title == "a.yml"


@pytest.mark.unit
def test_syntax_error_points_at_line() -> None:
    """The snippet marks the broken line."""
    text = "title: ok\ninner:\n  size: [1\n"
    with pytest.raises(ConfigParseError) as exc:
        _Doc.from_yaml(text)
    message = str(exc.value)
    assert message.startswith("Your YAML isn't valid.")
    assert "^" in message


@pytest.mark.unit
def test_missing_nested_field_suggests_block() -> None:
    """Missing fields come with a YAML example of where they go."""
    with pytest.raises(ConfigParseError) as exc:
        _Doc.from_yaml("title: t\ninner: {}\n")
    message = str(exc.value)
    assert "Missing required field: `inner.size`" in message
    assert "inner:\n  size: 123" in message


@pytest.mark.unit
def test_wrong_type_and_unknown_field() -> None:
    """Type errors and unexpected keys are both listed."""
    with pytest.raises(ConfigParseError) as exc:
        _Doc.from_yaml("title: t\ninner:\n  size: big\nextra: 1\n")
    message = str(exc.value)
    assert "Wrong type at `inner.size`" in message
    assert "Unknown field at `extra`" in message


@pytest.mark.unit
def test_empty_document_reports_missing_fields() -> None:
    """An empty file is treated as an empty mapping."""
    with pytest.raises(ConfigParseError, match="Missing required field: `title`"):
        _Doc.from_yaml("")


@pytest.mark.unit
def test_invalid_utf8_bytes() -> None:
    """Undecodable byte buffers are parse errors."""
    with pytest.raises(ConfigParseError, match="UTF-8"):
        _Doc.from_yaml(b"title: \xff\xfe\n")
