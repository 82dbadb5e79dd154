"""Version bumping for project packages and the packages that depend on them."""

from depclosure.core.bump.planner import BumpPlanner, BumpReport, git_changed_files
from depclosure.core.bump.versioned import BUMP_KINDS, VersionedPackage, bump_core

__all__ = [
    "BUMP_KINDS",
    "BumpPlanner",
    "BumpReport",
    "VersionedPackage",
    "bump_core",
    "git_changed_files",
]
