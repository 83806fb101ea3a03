"""Entrypoint to open an app described by a YAML config.

Example:
    python -m declarative_ui_engine
    python -m declarative_ui_engine path/to/app.yml --host console -v
    declarative-ui counter --port 8080 --banner "<b>DEMO</b>"
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from loguru import logger

from declarative_ui_engine.core.errors import ConfigParseError
from declarative_ui_engine.helpers.logging_helpers import configure_logger
from declarative_ui_engine.settings import settings

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def _port(value: str) -> int:
    """Validate and return a TCP port."""
    try:
        port = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError("port must be an integer") from e
    if not (1 <= port <= 65535):
        raise argparse.ArgumentTypeError("port must be between 1 and 65535")
    return port


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="declarative-ui",
        description="Open a window described by a YAML app config.",
    )
    parser.add_argument(
        "app",
        nargs="?",
        default=settings.default_app,
        help=(
            "Path to a YAML app config or the name of a bundled app "
            f"(default: {settings.default_app})."
        ),
    )
    parser.add_argument(
        "--version",
        dest="app_version",
        default="latest",
        help="Version of a bundled app to open (default: latest).",
    )
    parser.add_argument(
        "--host",
        choices=("window", "console"),
        default="window",
        help="Toolkit to render with: a gradio window or the terminal.",
    )
    parser.add_argument(
        "--server-name",
        type=str,
        default=settings.server_name,
        help=f"Interface the window binds to (default: {settings.server_name}).",
    )
    parser.add_argument(
        "--port",
        type=_port,
        default=settings.server_port,
        help=f"Port the window listens on (default: {settings.server_port}).",
    )
    parser.add_argument(
        "--share",
        action="store_true",
        help="Create a public gradio link.",
    )
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Do not open the window in a browser tab on launch.",
    )
    parser.add_argument(
        "--banner",
        type=str,
        default=None,
        help="Optional HTML banner shown at the top of the window.",
    )
    parser.add_argument(
        "--theme",
        type=str,
        default=settings.theme_path,
        help="YAML file with a console theme (console host only).",
    )
    parser.add_argument(
        "--source",
        type=str,
        default="declarative-ui",
        help="Name used for the log file (default: declarative-ui).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase console verbosity: -v for INFO, -vv for DEBUG.",
    )
    return parser.parse_args(argv)


def _run_window(args: argparse.Namespace) -> int:
    from declarative_ui_engine.core.engine import Engine
    from declarative_ui_engine.window.window import build_window

    engine = Engine.create(args.app, version=args.app_version)
    app = build_window(engine, banner=args.banner)
    try:
        logger.info(f"Launching window ({args.server_name}:{args.port})...")
        app.launch(
            server_name=args.server_name,
            server_port=args.port,
            share=args.share,
            inbrowser=settings.inbrowser and not args.no_browser,
        )
        return EXIT_OK  # normal exit after blocking launch returns
    except KeyboardInterrupt:
        logger.info("Window closed by interrupt. Shutting down...")
        return EXIT_OK
    finally:
        try:
            app.close()
        except Exception:
            logger.debug("Suppressing exception during app.close()", exc_info=True)


def _run_console(args: argparse.Namespace) -> int:
    from declarative_ui_engine.cli.runner import run_console

    try:
        run_console(args.app, version=args.app_version, custom_theme_path=args.theme)
    except (KeyboardInterrupt, EOFError):
        logger.info("Console closed by interrupt.")
    return EXIT_OK


def run(args: argparse.Namespace) -> int:
    """Open the app with the requested host and return the exit code."""
    try:
        if args.host == "console":
            return _run_console(args)
        return _run_window(args)
    except (ConfigParseError, FileNotFoundError) as e:
        logger.exception(f"Failed to load app config '{args.app}'")
        print(f"Could not load app config '{args.app}':\n{e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except Exception:
        logger.exception("Failed while building, launching, or running the app")
        return EXIT_FAILURE


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entrypoint."""
    args = parse_args(argv)

    try:
        configure_logger(source=args.source, verbose=args.verbose)
    except Exception as e:
        logger.warning(f"Failed to configure logger with source '{args.source}': {e}")

    sys.exit(run(args))


if __name__ == "__main__":
    main()
