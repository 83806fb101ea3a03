"""Logging setup shared by the window and console hosts.

Modules log through `from loguru import logger`. `configure_logger` decides
where those records go: the terminal (errors only unless -v is given) and a
rotated file that keeps the full trail of frames, clicks and reloads.
"""

import sys
from pathlib import Path
from typing import Union

from loguru import logger

from declarative_ui_engine.settings import settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level:^7} | {file.name}:{line} | {message}"
VERBOSE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level:<7}</level> | {message}"


def console_level(verbose: int) -> str:
    """Terminal level for a -v count: ERROR, then INFO, then DEBUG."""
    if verbose <= 0:
        return "ERROR"
    return "INFO" if verbose == 1 else "DEBUG"


def log_file_pattern(source: str, log_dir: Union[str, Path, None] = None) -> Path:
    """Dated log file for `source`, e.g. logs/declarative-ui_{time:YYYYMMDD}.log."""
    logs_dir = Path(log_dir) if log_dir is not None else Path(settings.log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir / f"{source}_{{time:YYYYMMDD}}.log"


def configure_logger(
    source: str, verbose: int = 0, log_dir: Union[str, Path, None] = None
) -> Path:
    """Replace loguru's sinks with the terminal and file sinks; returns the file pattern."""
    logger.remove()

    level = console_level(verbose)
    logger.add(
        sink=sys.stderr,
        level=level,
        format=VERBOSE_FORMAT if verbose > 0 else LOG_FORMAT,
        backtrace=verbose > 1,
    )

    log_path = log_file_pattern(source, log_dir)
    logger.add(
        sink=str(log_path),
        level=settings.log_level,
        format=LOG_FORMAT,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
        compression="zip",
    )

    logger.info(
        f"Logging '{source}' to stderr ({level}+) and '{log_path}' "
        f"({settings.log_level}+, rotation {settings.log_rotation}, "
        f"retention {settings.log_retention})."
    )
    return log_path
