"""Helpers for locating app configs."""

from pathlib import Path

import yaml
from loguru import logger
from packaging.version import InvalidVersion, Version  # type: ignore[import-untyped]

APPS_DIR = Path(__file__).parent.parent / "apps"


def list_bundled_apps(apps_dir: Path = APPS_DIR) -> dict[str, list[str]]:
    """Return {app name: [versions]} for the YAML configs in `apps_dir`."""
    found: dict[str, list[str]] = {}
    for path, doc in _read_headers(apps_dir):
        found.setdefault(doc["name"], []).append(str(doc.get("version", "")))
    return found


def _read_headers(apps_dir: Path) -> list[tuple[Path, dict]]:
    headers = []
    for path in sorted(apps_dir.glob("*.y*ml")):
        try:
            with path.open("r", encoding="utf-8") as f:
                doc = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError):
            logger.warning(
                f"Failed to read app config {path}. Maybe syntax error? Skipping."
            )
            continue
        if not isinstance(doc, dict) or not doc.get("name"):
            logger.warning(f"App config {path} has no top-level 'name' field. Skipping.")
            continue
        headers.append((path, doc))
    return headers


def get_app_config(app: str, version: str = "latest", apps_dir: Path = APPS_DIR) -> str:
    """Return the path to a YAML app config.

    Accepts either:
      - A filesystem path to a YAML config
      - An app name, matched case-insensitively against the `name` field of
        the bundled configs

    When several bundled configs share a name, `version` picks one:

      - "latest" (default): the highest stable release by PEP 440 ordering,
        else the highest pre-release, else the most recently modified file.
      - Any other string: the config whose `version` matches exactly.

    Raises FileNotFoundError when nothing matches.
    """
    possible_path = Path(app).expanduser()
    if possible_path.is_file() and possible_path.suffix.lower() in {".yml", ".yaml"}:
        return str(possible_path)

    headers = _read_headers(apps_dir)
    matches = [
        (path, doc)
        for path, doc in headers
        if str(doc["name"]).strip().lower() == app.strip().lower()
    ]
    if not matches:
        names_found = [doc["name"] for _, doc in headers]
        raise FileNotFoundError(
            f"No app config matching {app!r} found. Found built-ins: {names_found}"
        )

    if version != "latest":
        for path, doc in matches:
            if str(doc.get("version", "")).strip() == version:
                logger.debug(f"Selected app config {path} for {app!r} v{version}")
                return str(path)
        available = sorted(
            {str(doc.get("version", "")).strip() or "<none>" for _, doc in matches}
        )
        raise FileNotFoundError(
            f"No app config for {app!r} with version {version!r} found. "
            f"Available versions: {available}"
        )

    stable: list[tuple[Version, Path]] = []
    prerelease: list[tuple[Version, Path]] = []
    unversioned: list[Path] = []
    for path, doc in matches:
        raw = str(doc.get("version", "")).strip()
        try:
            v = Version(raw)
        except InvalidVersion:
            logger.warning(f"App config {path} has invalid version {raw!r}.")
            unversioned.append(path)
            continue
        if v.is_prerelease or v.is_devrelease:
            prerelease.append((v, path))
        else:
            stable.append((v, path))

    for candidates in (stable, prerelease):
        if candidates:
            v, chosen = max(candidates, key=lambda x: x[0])
            logger.debug(f"Selected app config {chosen} for {app!r}, version={v}")
            return str(chosen)

    chosen = max(unversioned, key=lambda p: p.stat().st_mtime)
    logger.debug(f"No version info for {app!r}; selected newest file {chosen}")
    return str(chosen)
