from __future__ import annotations

import logging
from typing import Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)


def zypper_dist_upgrade(*, dry_run: bool = False) -> None:
    run_cmd(["zypper", "dist-upgrade", "-y"], dry_run=dry_run)


def zypper_install(packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    run_cmd(
        ["zypper", "install", "--no-confirm", "--no-recommends", *packages],
        dry_run=dry_run,
    )
