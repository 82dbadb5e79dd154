"""Data types shared by the graph, closure engine, and resolver.

These are plain dataclasses with no behaviour beyond (de)serialization
helpers, so every stage of resolution can import them without
circular-import concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

UNKNOWN_VERSION = "unknown"


@dataclass(frozen=True)
class PackageDependency:
    """A dependency declaration, and the edge it becomes in the graph.

    Attributes:
        package: Name of the package depended upon.
        version: Pinned version for this edge, or None when unconstrained.
    """

    package: str
    version: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PackageDependency:
        """Build from a manifest entry such as ``{"package": "core", "versionNumber": "1.0.0.LATEST"}``."""
        return cls(package=data["package"], version=data.get("versionNumber"))

    def to_dict(self) -> dict[str, str]:
        out = {"package": self.package}
        if self.version is not None:
            out["versionNumber"] = self.version
        return out


@dataclass(frozen=True)
class ProjectPackage:
    """A package declared in the project manifest.

    Attributes:
        name: Unique package name.
        version: The package's own version (``1.0.0.NEXT``), if declared.
        dependencies: Direct dependencies, in manifest order.
        path: Source directory of the package relative to the project root.
    """

    name: str
    version: str | None = None
    dependencies: tuple[PackageDependency, ...] = ()
    path: str | None = None


@dataclass(frozen=True)
class DependencyDetail:
    """Provenance of one resolved dependency of a package.

    Attributes:
        version: The arbitrated version, or ``"unknown"`` when unpinned.
        is_direct: True if the package declares this exact dependency and
            version itself.
        contributors: Sorted names of the packages that introduced this
            version: the package itself for direct declarations, otherwise
            the direct dependencies it arrived through.
    """

    version: str
    is_direct: bool
    contributors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "isDirect": self.is_direct,
            "contributors": list(self.contributors),
        }


@dataclass
class Resolution:
    """Result of transitive dependency resolution.

    Attributes:
        resolved_dependencies: Package name -> deduplicated dependency list,
            ordered so that every entry comes after the entries it depends on.
        details: Package name -> dependency name -> provenance. Only packages
            with at least one resolved dependency appear here.
        order: Global build order; every package follows its dependencies.
    """

    resolved_dependencies: dict[str, list[PackageDependency]] = field(default_factory=dict)
    details: dict[str, dict[str, DependencyDetail]] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the manifest's camelCase field names."""
        return {
            "resolvedDependencies": {
                name: [dep.to_dict() for dep in deps]
                for name, deps in self.resolved_dependencies.items()
            },
            "details": {
                name: {dep: detail.to_dict() for dep, detail in entries.items()}
                for name, entries in self.details.items()
            },
            "order": list(self.order),
        }
