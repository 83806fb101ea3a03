"""YAML serialization / deserialization (serde) mixin for Pydantic models.

Example Usage:
cfg = AppConfig.from_yaml("apps/counter.yml")

ys = cfg.to_yaml()
cfg2 = AppConfig.from_yaml(ys)

cfg.save_yaml("copy.yml")
cfg3 = AppConfig.load_yaml("copy.yml")

Every loading failure is raised as a ConfigParseError whose message points
at the offending YAML line or config key in plain English.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, TypeVar, Union, get_args, get_origin

import yaml
from loguru import logger
from pydantic import BaseModel, ValidationError

from declarative_ui_engine.core.errors import ConfigParseError

T = TypeVar("T", bound="SerdeMixin")

YAML_SUFFIXES = {".yml", ".yaml"}


class SerdeMixin(BaseModel):
    """Mixin adding YAML round-trip methods to Pydantic models."""

    # ---------- exports ----------
    def to_dict(self, **dump_kwargs: Any) -> dict[str, Any]:
        """Convert model to plain python data (lists, dicts, scalars)."""
        return self.model_dump(mode="json", **dump_kwargs)

    def to_yaml(self, **dump_kwargs: Any) -> str:
        """Convert model to readable block-style YAML, keeping key order."""
        return str(
            yaml.safe_dump(
                self.to_dict(exclude_none=True),
                allow_unicode=True,
                sort_keys=False,
                default_flow_style=False,
                width=88,
                **dump_kwargs,
            )
        )

    # ---------- loaders ----------
    @classmethod
    def from_yaml(
        cls: type[T], source: Union[str, bytes, Path], **validate_kwargs: Any
    ) -> T:
        """Instantiate model from a YAML file path, YAML string or byte buffer."""
        text = cls._read_source(source)

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigParseError(cls._format_yaml_syntax_error(e, text)) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigParseError(
                "Your YAML loaded, but the top level must be a mapping of keys "
                f"to values, not a {type(data).__name__}."
            )

        cls._check_raw(data)

        try:
            return cls.model_validate(data, **validate_kwargs)
        except ValidationError as e:
            raise ConfigParseError(cls._format_validation_error(e)) from e

    @classmethod
    def _check_raw(cls, data: dict[str, Any]) -> None:
        """Hook for structural checks on the raw document before validation."""

    @staticmethod
    def _read_source(source: Union[str, bytes, Path]) -> str:
        if isinstance(source, bytes):
            logger.debug("YAML source is a byte buffer")
            try:
                return source.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ConfigParseError(f"Config is not valid UTF-8: {e}") from e

        looks_like_path = isinstance(source, Path) or (
            "\n" not in source and Path(source).suffix.lower() in YAML_SUFFIXES
        )
        if not looks_like_path:
            return str(source)

        path = Path(source)
        logger.debug(f"Reading YAML from {path}")
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ConfigParseError(f"Config file not found: {path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigParseError(f"Could not read config file {path}: {e}") from e

    # ---------- convenience save/load ----------
    def save_yaml(self, path: Union[str, Path], **dump_kwargs: Any) -> Path:
        """Save model to a YAML file. Returns the Path."""
        p = Path(path)
        p.write_text(self.to_yaml(**dump_kwargs), encoding="utf-8")
        return p

    @classmethod
    def load_yaml(cls: type[T], path: Union[str, Path], **validate_kwargs: Any) -> T:
        """Load model from a YAML file."""
        return cls.from_yaml(Path(path), **validate_kwargs)

    # ---------- helpers: friendly error messages ----------
    @staticmethod
    def _yaml_context_snippet(text: str, line: int, col: int, context: int = 1) -> str:
        """Build a tiny snippet pointing to the YAML error location.

        Lines are 1-based.
        """
        lines = text.splitlines()
        first = max(line - 1 - context, 0)
        last = min(line + context, len(lines))
        out = []
        for idx in range(first, last):
            prefix = ">" if idx == line - 1 else " "
            out.append(f"{prefix} {idx + 1:>4}: {lines[idx]}")
            if idx == line - 1:
                out.append(" " * (col + 8) + "^")  # 8 = prefix + gutter width
        return "\n".join(out)

    @classmethod
    def _format_yaml_syntax_error(cls, e: yaml.YAMLError, text: str) -> str:
        header = "Your YAML isn't valid."
        mark = getattr(e, "problem_mark", None)
        if mark is None:
            return f"{header} {e}"
        line, col = mark.line + 1, mark.column
        snippet = cls._yaml_context_snippet(text, line, col)
        return (
            f"{header}\nLine {line}, column {col + 1}.\n\n{snippet}\n\n"
            "Fix the YAML formatting at the ^ marker."
        )

    @classmethod
    def _format_validation_error(cls, e: ValidationError) -> str:
        """Turn Pydantic errors into actionable, plain-English guidance."""
        lines = ["Your YAML loaded, but it doesn't match the expected structure:"]
        for err in e.errors():
            loc = ".".join(str(p) for p in err.get("loc", ()))
            lines.append(
                f"• {cls._humanize_error(loc, err.get('type', ''), err.get('msg', ''))}"
            )
        lines.append(
            "\nTip: keys are case-sensitive; remove unknown keys; match the types shown."
        )
        return "\n".join(lines)

    @classmethod
    def _humanize_error(cls, loc: str, typ: str, msg: str) -> str:
        if typ == "missing":
            return (
                f"Missing required field: `{loc}`. Add it like:"
                f"{cls._yaml_block_for_path(loc, cls._example_for_field(loc))}"
            )
        if typ == "extra_forbidden":
            return f"Unknown field at `{loc}`. Remove this key or rename it."
        if typ.endswith("_type") or typ.endswith("_parsing") or "type" in typ:
            return f"Wrong type at `{loc}`. {msg}"
        nice = msg[0].upper() + msg[1:] if msg else "Invalid value."
        return f"{nice} (at `{loc}`)."

    @classmethod
    def _example_for_field(cls, loc: str) -> str:
        """Walk model_fields along a dotted path and suggest an example value."""
        model: Any = cls
        annotation: Any = None
        for part in loc.split(".") if loc else []:
            fields = getattr(model, "model_fields", None)
            if not fields or part not in fields:
                break
            annotation = fields[part].annotation
            if isinstance(annotation, type) and issubclass(annotation, BaseModel):
                model = annotation
        return _example_for_type(annotation)

    @staticmethod
    def _yaml_block_for_path(path: str, leaf: str) -> str:
        """Return an indented YAML block like `parent:\\n  child: <example>`."""
        parts = path.split(".") if path else []
        if not parts:
            return f" {leaf}"
        lines = []
        for depth, part in enumerate(parts):
            indent = "  " * depth
            if depth == len(parts) - 1:
                lines.append(f"{indent}{part}: {leaf}")
            else:
                lines.append(f"{indent}{part}:")
        return "\n" + "\n".join(lines)


def _example_for_type(tp: Any) -> str:
    """Heuristic example values; kept simple for people editing YAML by hand."""
    if tp is None:
        return "<value>"
    if tp is bool:
        return "true"
    if tp is int:
        return "123"
    if tp is str:
        return "<text>"
    origin = get_origin(tp)
    if origin is Union:
        return "<" + " or ".join(getattr(a, "__name__", str(a)) for a in get_args(tp)) + ">"
    if origin in (list, tuple):
        return "\n  - <item>"
    if origin is dict:
        return "\n  <key>: <value>"
    if isinstance(tp, type) and issubclass(tp, BaseModel):
        return "\n  <subfields…>"
    return "<value>"
