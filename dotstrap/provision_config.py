from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import ConfigError
from .lib.env import InvokingUser
from .logging_utils import DEFAULT_LOG_PATH

DEFAULTS_PATH = Path(__file__).with_name("defaults.yaml")


@dataclass(frozen=True)
class ProvisioningConfig:
    """Everything a run needs, resolved once at startup and never mutated."""

    user: InvokingUser
    bootstrap_packages: Tuple[str, ...]
    baseline_packages: Tuple[str, ...]
    package_groups: Tuple[Tuple[str, Tuple[str, ...]], ...]
    font_variant: str
    font_repo_url: str
    font_vendor_dir: str
    answers_path: str
    recap_path: str
    dialog_height: int = 30
    dialog_width: int = 100
    confirm_height: int = 100
    confirm_width: int = 100
    list_height: int = 20
    default_repo_url: str = "https://github.com/"
    default_ref: str = "main"
    resume_partial: bool = True
    dry_run: bool = False
    log_path: str = DEFAULT_LOG_PATH

    @property
    def font_target_dir(self) -> str:
        return os.path.join(self.user.data_home, "fonts", self.font_vendor_dir, self.font_variant)


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping/object")
    return raw


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def load_raw_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Packaged defaults, with the YAML file at path (if any) merged on top."""

    raw = _read_yaml(DEFAULTS_PATH)
    if path:
        p = Path(path)
        if not p.exists():
            raise ConfigError(f"Config file not found: {path}")
        if p.suffix.lower() not in {".yaml", ".yml"}:
            raise ConfigError("config file must be YAML")
        raw = _merge(raw, _read_yaml(p))
    return raw


def _str_list(value: Any, where: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ConfigError(f"{where} must be a list")
    return tuple(str(v).strip() for v in value if str(v).strip())


def build_provisioning_config(
    raw: Dict[str, Any],
    *,
    user: InvokingUser,
    dry_run: bool = False,
    log_path: str = DEFAULT_LOG_PATH,
) -> ProvisioningConfig:
    packages = raw.get("packages") or {}
    groups_raw = packages.get("groups") or {}
    if not isinstance(groups_raw, dict):
        raise ConfigError("packages.groups must be a mapping")
    groups = tuple(
        (str(name), _str_list(pkgs, f"packages.groups.{name}")) for name, pkgs in groups_raw.items()
    )

    font = raw.get("font") or {}
    variant = str(font.get("variant") or "").strip()
    if not variant:
        raise ConfigError("font.variant is required")
    repo_url = str(font.get("repo_url") or "").format(variant=variant)
    if not repo_url:
        raise ConfigError("font.repo_url is required")

    paths = raw.get("paths") or {}
    dlg = raw.get("dialog") or {}
    prompts = raw.get("prompts") or {}
    wizard = raw.get("wizard") or {}

    return ProvisioningConfig(
        user=user,
        bootstrap_packages=_str_list(packages.get("bootstrap"), "packages.bootstrap"),
        baseline_packages=_str_list(packages.get("baseline"), "packages.baseline"),
        package_groups=groups,
        font_variant=variant,
        font_repo_url=repo_url,
        font_vendor_dir=str(font.get("vendor_dir") or ""),
        answers_path=str(paths.get("answers_file") or "/tmp/configuration_output"),
        recap_path=str(paths.get("recap_file") or "/tmp/config_recap"),
        dialog_height=int(dlg.get("height", 30)),
        dialog_width=int(dlg.get("width", 100)),
        confirm_height=int(dlg.get("confirm_height", 100)),
        confirm_width=int(dlg.get("confirm_width", 100)),
        list_height=int(dlg.get("list_height", 20)),
        default_repo_url=str(prompts.get("dotfiles_repo_url") or ""),
        default_ref=str(prompts.get("dotfiles_ref") or "main"),
        resume_partial=bool(wizard.get("resume_partial", True)),
        dry_run=dry_run,
        log_path=log_path,
    )


def load_provisioning_config(
    path: Optional[str] = None,
    *,
    user: InvokingUser,
    dry_run: bool = False,
    log_path: str = DEFAULT_LOG_PATH,
) -> ProvisioningConfig:
    return build_provisioning_config(load_raw_config(path), user=user, dry_run=dry_run, log_path=log_path)
