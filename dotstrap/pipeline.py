from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Protocol, Sequence

from .config_store import ConfigurationRecord
from .lib.dialogs import DialogPrompter
from .provision_config import ProvisioningConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProvisionCtx:
    cfg: ProvisioningConfig
    record: ConfigurationRecord
    prompter: DialogPrompter

    @property
    def dry_run(self) -> bool:
        return self.cfg.dry_run


class Step(Protocol):
    """A single idempotent step."""

    step_id: str

    def run(self, ctx: ProvisionCtx) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]


def run_pipeline(*, ctx: ProvisionCtx, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order; the first failure ends the run.

    No step is skipped: each one checks the machine itself and does only
    what is missing, so a failed run is retried from the top.
    """

    ran: List[str] = []
    for step in steps:
        logger.info("Running step %s", step.step_id)
        step.run(ctx)
        ran.append(step.step_id)
    logger.info("Completed steps: %s", ", ".join(ran))
    return PipelineResult(ran_steps=ran)
