from .step_20_update_system import UpdateSystemStep
from .step_30_install_packages import InstallPackagesStep
from .step_40_git_identity import GitIdentityStep
from .step_50_install_font import InstallFontStep
from .step_60_fetch_dotfiles import FetchDotfilesStep
from .step_70_link_dotfiles import LinkDotfilesStep

__all__ = [
    "UpdateSystemStep",
    "InstallPackagesStep",
    "GitIdentityStep",
    "InstallFontStep",
    "FetchDotfilesStep",
    "LinkDotfilesStep",
]
