"""Tests for logging setup."""

from pathlib import Path

import pytest
from loguru import logger

from declarative_ui_engine import __main__ as entry
from declarative_ui_engine.helpers.logging_helpers import (
    configure_logger,
    console_level,
    log_file_pattern,
)


@pytest.mark.unit
def test_console_level_follows_verbosity() -> None:
    """Errors only by default; -v shows INFO, -vv and up DEBUG."""
    assert [console_level(v) for v in (0, 1, 2, 5)] == ["ERROR", "INFO", "DEBUG", "DEBUG"]


@pytest.mark.unit
def test_log_file_pattern_creates_dir(tmp_path: Path) -> None:
    """The directory exists afterwards; the date is left for loguru to fill in."""
    path = log_file_pattern("unit", tmp_path / "nested" / "logs")
    assert path.parent.is_dir()
    assert path.name == "unit_{time:YYYYMMDD}.log"


@pytest.mark.unit
def test_configure_logger_writes_daily_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """DEBUG records reach the file; the terminal only shows what -v allows."""
    configure_logger("unit", verbose=1, log_dir=tmp_path / "logs")

    logger.debug("only in the file")
    logger.info("on the terminal too")
    logger.complete()

    files = list((tmp_path / "logs").glob("unit_*.log"))
    assert len(files) == 1
    text = files[0].read_text(encoding="utf-8")
    assert "only in the file" in text
    assert "on the terminal too" in text

    err = capsys.readouterr().err
    assert "on the terminal too" in err
    assert "only in the file" not in err


@pytest.mark.unit
def test_main_exits_with_run_code(monkeypatch: pytest.MonkeyPatch) -> None:
    """main configures logging with the -v count and exits with run's code."""
    configured: list[tuple[str, int]] = []
    monkeypatch.setattr(
        entry,
        "configure_logger",
        lambda source, verbose: configured.append((source, verbose)),
    )
    monkeypatch.setattr(entry, "run", lambda args: entry.EXIT_CONFIG_ERROR)

    with pytest.raises(SystemExit) as exc:
        entry.main(["--source", "unit", "-v"])

    assert exc.value.code == entry.EXIT_CONFIG_ERROR
    assert configured == [("unit", 1)]
