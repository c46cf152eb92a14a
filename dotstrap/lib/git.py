from __future__ import annotations

import logging
import os
from typing import Optional

from .command import run_cmd

logger = logging.getLogger(__name__)


def _git(path: str) -> list[str]:
    # Trees are owned by the invoking user while we run as root.
    return ["git", "-c", f"safe.directory={path}", "-C", path]


def git_clone(
    url: str,
    dest: str,
    *,
    ref: Optional[str] = None,
    depth: Optional[int] = 1,
    dry_run: bool = False,
) -> None:
    argv = ["git", "clone"]
    if depth:
        argv += ["--depth", str(depth)]
    if ref:
        argv += ["--branch", ref]
    argv += [url, dest]
    run_cmd(argv, dry_run=dry_run)


def git_pull(path: str, *, dry_run: bool = False) -> None:
    run_cmd([*_git(path), "pull"], dry_run=dry_run)


def git_restore(path: str, *, dry_run: bool = False) -> None:
    """Drop working-tree changes, e.g. files pulled in by ``stow --adopt``."""
    run_cmd([*_git(path), "restore", "."], dry_run=dry_run)


def git_set_identity(name: str, email: str, *, home: str, dry_run: bool = False) -> None:
    env = {"HOME": home}
    run_cmd(["git", "config", "--global", "user.name", name], env=env, dry_run=dry_run)
    run_cmd(["git", "config", "--global", "user.email", email], env=env, dry_run=dry_run)


def git_global_config_path(home: str, *, dry_run: bool = False) -> str:
    """The file ``git config --global`` writes to for this HOME.

    That is ~/.gitconfig, unless only ~/.config/git/config exists.
    """

    r = run_cmd(
        ["git", "config", "--global", "--show-origin", "user.name"],
        env={"HOME": home},
        check=False,
        dry_run=dry_run,
    )
    origin = r.stdout.split("\t", 1)[0].strip()
    if origin.startswith("file:"):
        return origin[len("file:"):].strip('"')
    return os.path.join(home, ".gitconfig")
