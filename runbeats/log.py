"""Logging setup for the CLI. Library modules only call logging.getLogger."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "WARNING", console: Console | None = None) -> None:
    """Route all log records through a single rich handler on stderr."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Replace handlers so repeated CLI invocations in one process don't stack
    root_logger.handlers.clear()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root_logger.addHandler(handler)

    # spotipy logs every retry at WARNING; keep it quiet unless debugging
    if root_logger.level > logging.DEBUG:
        logging.getLogger("spotipy").setLevel(logging.ERROR)
