from __future__ import annotations

import logging

from ..lib.fs import list_top_level_dirs
from ..lib.git import git_restore
from ..lib.stow import stow_link
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)

SELECT_TITLE = "Select Stow packages"
SELECT_LABEL = "Select the packages to stow from your dotfiles into your home directory:"


class LinkDotfilesStep:
    step_id = "70_link_dotfiles"

    def run(self, ctx: ProvisionCtx) -> None:
        dest = ctx.record.dotfiles_dest_path
        home = ctx.cfg.user.home

        options = list_top_level_dirs(dest)
        # PromptCancelled propagates: nothing gets linked.
        selection = ctx.prompter.multi_select(SELECT_TITLE, SELECT_LABEL, options)
        unknown = selection - set(options)
        if unknown:
            logger.warning("Ignoring unknown stow packages: %s", ", ".join(sorted(unknown)))
            selection -= unknown

        linked = stow_link(
            selection,
            source_root=dest,
            target_root=home,
            adopt=True,
            dry_run=ctx.dry_run,
        )
        if not linked:
            return

        # --adopt moved the user's existing files into the repo; put the
        # committed versions back.
        git_restore(dest, dry_run=ctx.dry_run)
        logger.info("Linked %s into %s", ", ".join(linked), home)
