import logging
import sys
from typing import Optional

from timed_queue.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def _resolve_level(level: Optional[int | str]) -> int:
    if level is None:
        level = LOG_LEVEL
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    # getLevelName returns "Level X" for unknown names
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Optional[int | str] = None) -> None:
    """
    Configure root logging for the API server and the CLI.

    - Logs go to stdout
    - The level comes from TIMED_QUEUE_LOG_LEVEL unless given explicitly
    - Handlers installed by uvicorn are kept; only the level is adjusted
    """
    root = logging.getLogger()
    resolved = _resolve_level(level)

    if root.handlers:
        root.setLevel(resolved)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))

    root.addHandler(handler)
    root.setLevel(resolved)
