"""Version bumping of a single package and of its dependency pins."""

from __future__ import annotations

import re
from typing import Any

from depclosure.core.dependency import (
    LATEST_SUFFIX,
    NEXT_SUFFIX,
    ProjectPackage,
    core_version,
    parse_version,
)
from depclosure.exceptions import VersionError

BUMP_KINDS = ("major", "minor", "patch", "custom")

_CORE_RE = re.compile(r"^[0-9]+\.[0-9]+\.[0-9]+$")


def bump_core(version: str, kind: str) -> str:
    """Increment the ``MAJOR.MINOR.PATCH`` core of *version*.

    Args:
        version: Any manifest version; only its first three segments are used.
        kind: ``"major"``, ``"minor"`` or ``"patch"``.

    Returns:
        The incremented three-part version, e.g. ``"1.3.0"``.

    Raises:
        VersionError: If *kind* is not a known bump kind.
    """
    major, minor, patch = parse_version(version).core
    if kind == "major":
        return f"{major + 1}.0.0"
    if kind == "minor":
        return f"{major}.{minor + 1}.0"
    if kind == "patch":
        return f"{major}.{minor}.{patch + 1}"
    raise VersionError(f"Unknown version bump kind: {kind!r}")


class VersionedPackage:
    """A package (or a dependency pin) whose version may be bumped.

    A package is bumped at most once per run: later bump requests are
    ignored so that a package reached both directly and as a dependent
    keeps its first new version.
    """

    def __init__(
        self,
        name: str,
        current_version: str | None = None,
        dependencies: list[VersionedPackage] | None = None,
        path: str | None = None,
    ) -> None:
        self.name = name
        self.current_version = current_version
        self.new_version: str | None = None
        self.dependencies = dependencies or []
        self.path = path

    @classmethod
    def from_project_package(cls, pkg: ProjectPackage) -> VersionedPackage:
        return cls(
            name=pkg.name,
            current_version=pkg.version,
            dependencies=[cls(dep.package, dep.version) for dep in pkg.dependencies],
            path=pkg.path,
        )

    @property
    def is_updated(self) -> bool:
        return self.new_version is not None

    def suffix(self) -> str:
        """Suffix kept across bumps: the floating marker, or ``.0``."""
        current = self.current_version or ""
        if NEXT_SUFFIX in current:
            return NEXT_SUFFIX
        if LATEST_SUFFIX in current:
            return LATEST_SUFFIX
        return ".0"

    def cleaned_version(self, version: str | None = None) -> str:
        return core_version(version or self.current_version or "0.0.0")

    def increment(self, kind: str = "patch", custom: str | None = None) -> None:
        """Bump this package's version.

        Args:
            kind: One of ``BUMP_KINDS``.
            custom: The new ``X.Y.Z`` version when *kind* is ``"custom"``.

        Raises:
            VersionError: On an unknown kind or an invalid custom version.
        """
        if kind == "custom":
            if not custom:
                raise VersionError("A custom version bump needs a version number")
            self.update_version(custom)
            return
        self.update_version(bump_core(self.cleaned_version(), kind))

    def update_version(self, version: str) -> None:
        if not _CORE_RE.match(version):
            raise VersionError(f"Cannot update with invalid version number: {version}")
        if self.is_updated:
            return
        self.new_version = version + self.suffix()

    def dependency(self, name: str) -> VersionedPackage | None:
        for dep in self.dependencies:
            if dep.name == name:
                return dep
        return None

    def update_dependency(self, parent: VersionedPackage) -> VersionedPackage | None:
        """Re-pin this package's dependency on *parent* to parent's new version.

        Returns:
            The updated dependency, or None if this package does not depend on
            *parent*, the dependency is unpinned, *parent* was not bumped, or
            the pin was already updated.
        """
        dep = self.dependency(parent.name)
        if dep is None or dep.current_version is None:
            return None
        if dep.is_updated or parent.new_version is None:
            return None
        dep.update_version(self.cleaned_version(parent.new_version))
        return dep

    def version_change(self) -> tuple[str, str | None]:
        """``(old core, new core)``; the new core is None when not bumped."""
        new = self.cleaned_version(self.new_version) if self.is_updated else None
        return self.cleaned_version(), new

    def to_dict(self) -> dict[str, Any]:
        """Manifest-shaped representation with the new versions applied."""
        out: dict[str, Any] = {"package": self.name}
        if self.current_version is None:
            return out
        out["versionNumber"] = self.new_version or self.current_version
        if self.dependencies:
            out["dependencies"] = [dep.to_dict() for dep in self.dependencies]
        return out

    def __repr__(self) -> str:
        return f"VersionedPackage({self.name!r}, {self.current_version!r} -> {self.new_version!r})"
