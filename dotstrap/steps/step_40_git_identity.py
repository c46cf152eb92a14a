from __future__ import annotations

import logging

from ..lib.fs import chown_path
from ..lib.git import git_global_config_path, git_set_identity
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class GitIdentityStep:
    step_id = "40_git_identity"

    def run(self, ctx: ProvisionCtx) -> None:
        user = ctx.cfg.user
        record = ctx.record

        git_set_identity(
            record.git_user_name,
            record.git_user_email,
            home=user.home,
            dry_run=ctx.dry_run,
        )
        # Written as root; hand back whichever global config git picked.
        config_path = git_global_config_path(user.home, dry_run=ctx.dry_run)
        chown_path(config_path, user, dry_run=ctx.dry_run)
        logger.info(
            "Git identity set for %s in %s: %s <%s>",
            user.name,
            config_path,
            record.git_user_name,
            record.git_user_email,
        )
