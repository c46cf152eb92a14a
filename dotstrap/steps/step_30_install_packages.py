from __future__ import annotations

import logging

from ..lib.pkg import zypper_install
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class InstallPackagesStep:
    step_id = "30_install_packages"

    def run(self, ctx: ProvisionCtx) -> None:
        cfg = ctx.cfg

        # Baseline CLI tools first, then one transaction per extra group
        # (compositor, terminal, editor) so a broken group is easy to spot.
        zypper_install(cfg.baseline_packages, dry_run=ctx.dry_run)
        for name, packages in cfg.package_groups:
            logger.info("Installing package group %s", name)
            zypper_install(packages, dry_run=ctx.dry_run)
