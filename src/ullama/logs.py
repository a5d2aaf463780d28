"""Process-wide logging setup for the proxy and the CLI."""

import logging

from rich.logging import RichHandler

LOG_LEVELS = ("debug", "info", "warning", "error")


def configure_logging(level: str = "info") -> None:
    """Route stdlib logging through a Rich handler.

    Args:
        level: One of debug, info, warning, error

    Raises:
        ValueError: If the level name is unknown
    """
    if level.lower() not in LOG_LEVELS:
        raise ValueError(
            f"Unknown log level: {level}. "
            f"Supported levels: {', '.join(LOG_LEVELS)}"
        )

    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
