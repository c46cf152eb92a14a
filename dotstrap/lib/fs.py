from __future__ import annotations

import logging
import os
from pathlib import Path

from ..errors import DestinationError
from .command import run_cmd
from .env import InvokingUser

logger = logging.getLogger(__name__)


def dir_is_empty(path: str) -> bool:
    """True when path is missing or has no entries."""
    p = Path(path)
    if not p.exists():
        return True
    if not p.is_dir():
        raise DestinationError(f"{path} exists but is not a directory")
    return not any(p.iterdir())


def ensure_user_dir(path: str, user: InvokingUser, *, dry_run: bool = False) -> None:
    """mkdir -p, handing every directory we create over to user."""

    p = Path(path)
    missing: list[Path] = []
    cur = p
    while not cur.exists():
        missing.append(cur)
        if cur.parent == cur:
            break
        cur = cur.parent

    if not missing:
        return

    if dry_run:
        logger.info("Would create %s (owner %s)", str(p), user.owner)
        return

    for d in reversed(missing):
        d.mkdir()
        os.chown(d, user.uid, user.gid)
    logger.info("Created %s (owner %s)", str(p), user.owner)


def chown_tree(path: str, user: InvokingUser, *, dry_run: bool = False) -> None:
    run_cmd(["chown", "-R", user.owner, path], dry_run=dry_run)


def chown_path(path: str, user: InvokingUser, *, dry_run: bool = False) -> None:
    run_cmd(["chown", user.owner, path], dry_run=dry_run)


def list_top_level_dirs(path: str) -> list[str]:
    p = Path(path)
    if not p.is_dir():
        return []
    return sorted(c.name for c in p.iterdir() if c.is_dir() and not c.name.startswith("."))
