from __future__ import annotations

import logging

from ..lib.pkg import zypper_dist_upgrade
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class UpdateSystemStep:
    step_id = "20_update_system"

    def run(self, ctx: ProvisionCtx) -> None:
        logger.info("Updating system...")
        zypper_dist_upgrade(dry_run=ctx.dry_run)
