"""Logging setup shared by the CLI commands."""

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "atlas.log"

_installed_handlers = []


def setup_logging(log_dir: Path, verbose: bool = False) -> None:
    """Send log records to `<log_dir>/atlas.log` and to stderr.

    The file always receives DEBUG and above. Stderr gets INFO when verbose
    and WARNING otherwise so normal play stays quiet. Calling this again
    replaces the handlers installed by the previous call.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    for handler in _installed_handlers:
        root.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = logging.FileHandler(log_dir / LOG_FILE, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    stream_handler.setFormatter(formatter)

    for handler in (file_handler, stream_handler):
        root.addHandler(handler)
        _installed_handlers.append(handler)
    root.setLevel(logging.DEBUG)
