"""Helpers for tests."""

import copy
from pathlib import Path
from types import SimpleNamespace

import yaml


def _merge_into(base: dict, patch: dict) -> dict:
    """Deep-ish merge: patch keys overwrite; descend only if both sides are dicts."""
    out = copy.deepcopy(base)
    for k, v in patch.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge_into(out[k], v)
        else:
            out[k] = v
    return out


def patch_yml(base_path: Path, patch_yml_str: str, suffix: str = "patched") -> SimpleNamespace:
    """Write a copy of a YAML app config with `patch_yml_str` merged over it."""
    base = yaml.safe_load(base_path.read_text(encoding="utf-8"))
    patch = yaml.safe_load(patch_yml_str)
    merged = _merge_into(base, patch)

    patched_path = base_path.with_name(f"{base_path.stem}_{suffix}.yml")
    patched_path.write_text(yaml.safe_dump(merged, sort_keys=False), encoding="utf-8")
    return SimpleNamespace(path=patched_path, data=merged)
