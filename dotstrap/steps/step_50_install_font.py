from __future__ import annotations

import logging

from ..lib.command import run_cmd
from ..lib.fs import chown_tree, dir_is_empty, ensure_user_dir
from ..lib.git import git_clone, git_pull
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class InstallFontStep:
    step_id = "50_install_font"

    def run(self, ctx: ProvisionCtx) -> None:
        cfg = ctx.cfg
        target = cfg.font_target_dir

        ensure_user_dir(target, cfg.user, dry_run=ctx.dry_run)
        if dir_is_empty(target):
            git_clone(cfg.font_repo_url, target, dry_run=ctx.dry_run)
            chown_tree(target, cfg.user, dry_run=ctx.dry_run)
            logger.info("Font %s cloned into %s", cfg.font_variant, target)
        else:
            git_pull(target, dry_run=ctx.dry_run)
            logger.info("Font %s already present; updated in place", cfg.font_variant)

        run_cmd(["fc-cache", target], dry_run=ctx.dry_run)
