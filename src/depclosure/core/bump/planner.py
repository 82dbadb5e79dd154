"""Plan version bumps across a project.

A bump run has three steps:

1. Select packages: one by name, all of them, or those with files changed
   since a git reference.
2. Increment each selected package.
3. Re-pin every package that depends on a bumped package to the new
   version, optionally patch-bumping those dependents as well.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from depclosure.core.bump.versioned import VersionedPackage
from depclosure.core.dependency import ProjectPackage
from depclosure.exceptions import BumpError

logger = logging.getLogger(__name__)


@dataclass
class BumpReport:
    """Outcome of a bump run.

    Attributes:
        packages: Packages that were selected and bumped.
        dependents: Packages whose dependency pins changed as a result.
    """

    packages: list[VersionedPackage] = field(default_factory=list)
    dependents: list[VersionedPackage] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "packages": [pkg.to_dict() for pkg in self.packages],
            "dependencies": [pkg.to_dict() for pkg in self.dependents],
        }

    def manifest_updates(self) -> dict[str, dict[str, Any]]:
        """Package name -> manifest fields to write back."""
        updates: dict[str, dict[str, Any]] = {}
        for pkg in [*self.packages, *self.dependents]:
            fields = pkg.to_dict()
            fields.pop("package")
            updates[pkg.name] = fields
        return updates


def git_changed_files(target_ref: str, cwd: Path | None = None) -> list[str]:
    """List files changed relative to *target_ref* using ``git diff --name-only``.

    Paths are reported relative to *cwd* (``--relative``), the directory
    holding the manifest, so they line up with package paths even when the
    manifest is not at the repository root. Changes outside *cwd* are omitted.

    Raises:
        BumpError: If git is missing or the diff fails.
    """
    try:
        result = subprocess.run(
            ["git", "diff", "--name-only", "--relative", target_ref],
            capture_output=True,
            text=True,
            check=True,
            cwd=str(cwd) if cwd else None,
        )
    except FileNotFoundError as exc:
        raise BumpError("git executable not found") from exc
    except subprocess.CalledProcessError as exc:
        raise BumpError(f"Error running git diff: {exc.stderr.strip() or exc}") from exc
    return [line.strip() for line in result.stdout.splitlines() if line.strip()]


def _in_package(file_path: str, package_path: str) -> bool:
    prefix = package_path.rstrip("/")
    while prefix.startswith("./"):
        prefix = prefix[2:]
    if prefix in ("", "."):
        return True
    return file_path == prefix or file_path.startswith(prefix + "/")


class BumpPlanner:
    """Select, bump, and propagate package versions.

    Args:
        packages: Packages as declared in the manifest.
    """

    def __init__(self, packages: Iterable[ProjectPackage]) -> None:
        self.packages: dict[str, VersionedPackage] = {
            pkg.name: VersionedPackage.from_project_package(pkg) for pkg in packages
        }

    # -- Selection --------------------------------------------------------------

    def select_package(self, name: str) -> list[VersionedPackage]:
        pkg = self.packages.get(name)
        if pkg is None:
            raise BumpError(f"Package {name} not found in manifest")
        return [pkg]

    def select_all(self) -> list[VersionedPackage]:
        return list(self.packages.values())

    def select_changed(
        self,
        target_ref: str,
        cwd: Path | None = None,
        changed_files: list[str] | None = None,
    ) -> list[VersionedPackage]:
        """Select packages with at least one file changed since *target_ref*."""
        if changed_files is None:
            changed_files = git_changed_files(target_ref, cwd)
        selected = [
            pkg for pkg in self.packages.values()
            if pkg.path and any(_in_package(f, pkg.path) for f in changed_files)
        ]
        logger.info(
            "%d package(s) changed since %s: %s",
            len(selected), target_ref, ", ".join(p.name for p in selected) or "none",
        )
        return selected

    # -- Bumping ------------------------------------------------------------------

    def update_dependencies(
        self,
        updated: Iterable[VersionedPackage],
        increment_dependents: bool = False,
    ) -> list[VersionedPackage]:
        """Re-pin dependents of every package in *updated*.

        Returns:
            Dependent packages whose pins changed, without duplicates.
        """
        dependents: dict[str, VersionedPackage] = {}
        for parent in updated:
            for pkg in self.packages.values():
                if pkg.update_dependency(parent) is None:
                    continue
                if increment_dependents:
                    pkg.increment()
                dependents.setdefault(pkg.name, pkg)
        return list(dependents.values())

    def plan(
        self,
        selected: list[VersionedPackage],
        kind: str = "patch",
        custom: str | None = None,
        increment_dependents: bool = False,
    ) -> BumpReport:
        """Bump *selected* packages and propagate the new versions."""
        for pkg in selected:
            pkg.increment(kind, custom)
        dependents = self.update_dependencies(selected, increment_dependents)
        return BumpReport(packages=list(selected), dependents=dependents)
