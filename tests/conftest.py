"""The main entry point for pytest fixtures.

This will run before any tests are executed when `import pytest` is called.
"""

from __future__ import annotations

import logging
import textwrap
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator

import pytest
from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level:^7} | {file.name}:{line} | {message}"

COUNTER_YML = """
name: Hello Counter
version: 1.0.0
description: The reference example.
context:
  your_name: ""
  counter: 0
root:
  kind: container
  name: main
  children:
    - kind: label
      name: greeting
      text: Hello
    - kind: text_input
      name: your_name
      default: ""
    - kind: button
      name: inc
      caption: Increment
      on_click:
        op: increment
        target: counter
"""


def _setup_logging() -> None:
    """Add a file sink to the default pytest console logging."""
    # logs/pytest_YYYYMMDD.log
    logs_dir = Path(__file__).resolve().parent.parent / "logs"
    logs_dir.mkdir(exist_ok=True)
    logfile = logs_dir / f"pytest_{datetime.now():%Y%m%d}.log"

    logger.add(
        logfile,
        level="DEBUG",
        format=LOG_FORMAT,
        rotation="00:00",
        retention="7 days",
        compression="zip",
    )

    # Intercept stdlib logging so everything funnels through Loguru
    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = logging.getLevelName(record.levelno)
            logger.opt(depth=6, exception=record.exc_info, colors=False).log(
                level, record.getMessage()
            )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def pytest_configure(config: pytest.Config) -> None:
    """Pytest configuration hook to add a file sink to default pytest logging."""
    _setup_logging()


def _write_yaml(path: Path, body: str) -> None:
    path.write_text(textwrap.dedent(body).strip() + "\n", encoding="utf-8")


@pytest.fixture
def write_yaml(tmp_path: Path) -> Callable[[str, str], Path]:
    """Create a YAML file inside tmp_path and give you a path to it.

    Returns:
      a function you can call with (filename, body)
    """

    def _write(filename: str, body: str) -> Path:
        file_path = tmp_path / filename
        _write_yaml(file_path, body)
        return file_path

    return _write


@pytest.fixture
def counter_yml_path(write_yaml: Callable[[str, str], Path]) -> Path:
    """The Hello / your_name / Increment reference app as a YAML file."""
    return write_yaml("counter.yml", COUNTER_YML)


@pytest.fixture
def loguru_messages() -> Iterator[Callable[[], list[str]]]:
    """Capture loguru messages emitted during a test."""
    messages: list[str] = []
    sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield lambda: messages
    logger.remove(sink_id)
