"""Logging for a dotstrap run.

The log file gets everything, including captured command output. The
terminal is mostly owned by dialog, so stderr only carries what the user
must read: warnings and the error that ended the run.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

DEFAULT_LOG_PATH = "/var/log/dotstrap.log"
FALLBACK_LOG_NAME = "dotstrap.log"

FILE_HANDLER = "dotstrap-file"
CONSOLE_HANDLER = "dotstrap-console"


def _open_log_file(log_path: str) -> Tuple[logging.FileHandler, str]:
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path), log_path
    except OSError:
        # Not root yet (dry run) or read-only /var/log.
        fallback = str(Path.cwd() / FALLBACK_LOG_NAME)
        return logging.FileHandler(fallback), fallback


def configure_logging(log_path: str = DEFAULT_LOG_PATH, *, verbose: bool = False) -> str:
    """Install the file and stderr handlers and return the log file in use.

    stderr shows WARNING and above, or INFO with verbose. Calling again
    replaces the handlers of the previous call.
    """

    root = logging.getLogger()
    for h in list(root.handlers):
        if h.get_name() in {FILE_HANDLER, CONSOLE_HANDLER}:
            root.removeHandler(h)
            h.close()
    root.setLevel(logging.DEBUG)

    file_handler, chosen_path = _open_log_file(log_path)
    file_handler.set_name(FILE_HANDLER)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    )

    console = logging.StreamHandler()
    console.set_name(CONSOLE_HANDLER)
    console.setLevel(logging.INFO if verbose else logging.WARNING)
    console.setFormatter(logging.Formatter("%(message)s"))

    root.addHandler(file_handler)
    root.addHandler(console)

    if chosen_path != log_path:
        logging.getLogger(__name__).warning("Cannot write %s; logging to %s", log_path, chosen_path)
    return chosen_path
