"""
Root logging setup for the engine and its tools.

Level and log directory come from `Settings` (LOG_LEVEL / LOGS_DIR). The
console handler is always attached; a UTC file log under the logs directory
is opt-in. Library modules only call `get_logger`; entry points call
`setup_logging` once.
"""

import logging
import time
from pathlib import Path
from typing import Optional, Union

from core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
LOG_FILE_NAME = "tickbar.log"

CONSOLE_HANDLER = "tickbar-console"
FILE_HANDLER = "tickbar-file"


def resolve_level(level: Union[str, int, None] = None) -> int:
    """Numeric level for `level`, falling back to `settings.log_level`."""
    if level is None:
        level = settings.log_level
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def _utc_formatter() -> logging.Formatter:
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    formatter.converter = time.gmtime
    return formatter


def _named_handler(root: logging.Logger, name: str) -> Optional[logging.Handler]:
    for handler in root.handlers:
        if handler.name == name:
            return handler
    return None


def setup_logging(
    level: Union[str, int, None] = None,
    log_file: bool = False,
    logs_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Attach the shared handlers to the root logger and apply the level.

    Safe to call repeatedly: handlers are found by name and only added once.
    With `log_file`, records also go to `{logs_dir}/tickbar.log`.
    """
    root = logging.getLogger()
    resolved = resolve_level(level)

    if _named_handler(root, CONSOLE_HANDLER) is None:
        console = logging.StreamHandler()
        console.name = CONSOLE_HANDLER
        console.setFormatter(_utc_formatter())
        root.addHandler(console)

    if log_file and _named_handler(root, FILE_HANDLER) is None:
        path = Path(logs_dir or settings.logs_dir) / LOG_FILE_NAME
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.name = FILE_HANDLER
        file_handler.setFormatter(_utc_formatter())
        root.addHandler(file_handler)

    root.setLevel(resolved)
    for handler in root.handlers:
        if handler.name in (CONSOLE_HANDLER, FILE_HANDLER):
            handler.setLevel(resolved)
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
