from __future__ import annotations

import argparse
import logging
from typing import Mapping, Optional

from .config_store import ConfigStore
from .errors import DotstrapError
from .lib.dialogs import DialogPrompter
from .lib.env import require_privileges
from .lib.pkg import zypper_install
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import PipelineResult, ProvisionCtx, run_pipeline
from .provision_config import ProvisioningConfig, load_provisioning_config
from .steps import (
    FetchDotfilesStep,
    GitIdentityStep,
    InstallFontStep,
    InstallPackagesStep,
    LinkDotfilesStep,
    UpdateSystemStep,
)
from .wizard import ConfigurationWizard

logger = logging.getLogger(__name__)


def build_steps():
    return [
        UpdateSystemStep(),
        InstallPackagesStep(),
        GitIdentityStep(),
        InstallFontStep(),
        FetchDotfilesStep(),
        LinkDotfilesStep(),
    ]


def build_prompter(cfg: ProvisioningConfig) -> DialogPrompter:
    return DialogPrompter(
        height=cfg.dialog_height,
        width=cfg.dialog_width,
        confirm_height=cfg.confirm_height,
        confirm_width=cfg.confirm_width,
        list_height=cfg.list_height,
    )


def run(
    *,
    config_path: Optional[str] = None,
    log_path: str = DEFAULT_LOG_PATH,
    dry_run: bool = False,
    prompter: Optional[DialogPrompter] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> PipelineResult:
    """Check privileges, run the wizard, then provision."""

    user = require_privileges(environ=environ, dry_run=dry_run)
    cfg = load_provisioning_config(config_path, user=user, dry_run=dry_run, log_path=log_path)

    # The wizard needs the dialog binary.
    zypper_install(cfg.bootstrap_packages, dry_run=dry_run)

    prompter = prompter or build_prompter(cfg)
    wizard = ConfigurationWizard(
        ConfigStore(cfg.answers_path),
        prompter,
        recap_path=cfg.recap_path,
        default_name=user.name,
        default_repo_url=cfg.default_repo_url,
        default_ref=cfg.default_ref,
        resume_partial=cfg.resume_partial,
    )
    record = wizard.run()

    logger.info("Starting setup phase...")
    ctx = ProvisionCtx(cfg=cfg, record=record, prompter=prompter)
    result = run_pipeline(ctx=ctx, steps=build_steps())
    logger.info("Provisioning complete. Full log: %s", cfg.log_path)
    return result


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="dotstrap")
    p.add_argument("--config", default=None, help="YAML file merged over the packaged defaults")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the run log")
    p.add_argument("--dry-run", action="store_true", help="Log commands without running them")
    p.add_argument("--verbose", action="store_true", help="Show progress messages on the terminal")

    args = p.parse_args(argv)

    log_path = configure_logging(args.log, verbose=bool(args.verbose))

    try:
        run(
            config_path=args.config,
            log_path=log_path,
            dry_run=bool(args.dry_run),
        )
    except DotstrapError as e:
        logger.error("%s\nFull log: %s", e, log_path)
        return e.exit_code
    except Exception:
        logger.exception("dotstrap failed; full log: %s", log_path)
        raise
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
