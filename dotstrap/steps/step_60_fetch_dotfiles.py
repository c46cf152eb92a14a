from __future__ import annotations

import logging

from ..lib.fs import chown_tree, dir_is_empty, ensure_user_dir
from ..lib.git import git_clone, git_pull
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class FetchDotfilesStep:
    step_id = "60_fetch_dotfiles"

    def run(self, ctx: ProvisionCtx) -> None:
        record = ctx.record
        user = ctx.cfg.user
        dest = record.dotfiles_dest_path

        ensure_user_dir(dest, user, dry_run=ctx.dry_run)
        if dir_is_empty(dest):
            git_clone(
                record.dotfiles_repo_url,
                dest,
                ref=record.dotfiles_ref,
                dry_run=ctx.dry_run,
            )
            chown_tree(dest, user, dry_run=ctx.dry_run)
            logger.info("Dotfiles cloned (%s@%s) into %s", record.dotfiles_repo_url, record.dotfiles_ref, dest)
        else:
            git_pull(dest, dry_run=ctx.dry_run)
            logger.info("Dotfiles already present in %s; pulled latest", dest)
