from __future__ import annotations

import logging
from typing import Iterable

from .command import run_cmd

logger = logging.getLogger(__name__)


def stow_link(
    packages: Iterable[str],
    *,
    source_root: str,
    target_root: str,
    adopt: bool = False,
    dry_run: bool = False,
) -> list[str]:
    """Link the given stow packages from source_root into target_root.

    Returns the packages actually passed to stow (sorted); nothing runs when
    the selection is empty.
    """

    selected = sorted(set(packages))
    if not selected:
        logger.info("No stow packages selected; nothing to link")
        return []

    argv = ["stow", "-d", source_root, "-t", target_root]
    if adopt:
        argv.append("--adopt")
    argv += ["--dotfiles", "-v", *selected]
    run_cmd(argv, dry_run=dry_run)
    return selected
