from __future__ import annotations

import grp
import logging
import os
import pwd
from dataclasses import dataclass
from typing import Mapping, Optional

from ..errors import PrivilegeError
from .command import run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvokingUser:
    """The non-root user the machine is being provisioned for."""

    name: str
    uid: int
    gid: int
    group: str
    home: str
    xdg_data_home: Optional[str] = None

    @property
    def owner(self) -> str:
        return f"{self.name}:{self.group}"

    @property
    def data_home(self) -> str:
        return self.xdg_data_home or os.path.join(self.home, ".local", "share")


def _login_env_var(user: str, var: str) -> Optional[str]:
    r = run_cmd(["su", "-", user, "-c", f"printenv {var}"], check=False)
    value = r.stdout.strip()
    return value or None


def lookup_user(name: str, *, read_login_env: bool = True) -> InvokingUser:
    try:
        pw = pwd.getpwnam(name)
    except KeyError as e:
        raise PrivilegeError(f"Unknown user: {name}") from e

    try:
        group = grp.getgrgid(pw.pw_gid).gr_name
    except KeyError:
        group = str(pw.pw_gid)

    xdg = _login_env_var(name, "XDG_DATA_HOME") if read_login_env else None
    return InvokingUser(
        name=name,
        uid=pw.pw_uid,
        gid=pw.pw_gid,
        group=group,
        home=pw.pw_dir,
        xdg_data_home=xdg,
    )


def require_privileges(
    *,
    environ: Optional[Mapping[str, str]] = None,
    euid: Optional[int] = None,
    dry_run: bool = False,
) -> InvokingUser:
    """Verify we run as root on behalf of a regular user and resolve that user.

    In dry_run the checks only warn and the current user stands in.
    """

    env = os.environ if environ is None else environ
    effective = os.geteuid() if euid is None else euid

    if effective != 0:
        if not dry_run:
            raise PrivilegeError("This script must be run as root.")
        logger.warning("Not running as root; continuing because of dry run")

    sudo_user = env.get("SUDO_USER")
    if not sudo_user or sudo_user == "root":
        if not dry_run:
            raise PrivilegeError(
                "Could not determine the invoking user; run this script through sudo from your own account."
            )
        fallback = pwd.getpwuid(os.getuid()).pw_name
        logger.warning("SUDO_USER not set; using %s for dry run", fallback)
        return lookup_user(fallback, read_login_env=False)

    user = lookup_user(sudo_user)
    logger.info("Provisioning for user %s (home=%s)", user.name, user.home)
    return user
