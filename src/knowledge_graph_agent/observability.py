"""Logging setup for the knowledge graph agent."""

import logging
from pathlib import Path

from rich.logging import RichHandler

NOISY_LOGGERS = ("neo4j", "httpx", "openai")


def setup_logging(log_level: str = "INFO", log_file: Path | None = None) -> None:
    """
    Configure root logging.

    Args:
        log_level: Level name applied to the root logger
        log_file: Optional file that receives the same records in plain text
    """
    handlers: list[logging.Handler] = [RichHandler(rich_tracebacks=True, show_path=False)]
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
