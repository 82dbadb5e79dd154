"""Transitive dependency resolution for multi-package projects.

Packages declare direct dependencies on other packages, each pinned to a
version or to a floating marker (``NEXT``/``LATEST``). This package computes,
for every package, the complete deduplicated and ordered set of packages it
needs, rejects dependency cycles, and records which dependency pulled in
which transitive one.

All public names are re-exported here so callers can write
``from depclosure.core.dependency import TransitiveDependencyResolver``.
"""

from depclosure.core.dependency.closure import (
    ClosureResult,
    PackageClosure,
    expand,
)
from depclosure.core.dependency.graph import (
    DependencyGraph,
    topological_sort,
)
from depclosure.core.dependency.models import (
    UNKNOWN_VERSION,
    DependencyDetail,
    PackageDependency,
    ProjectPackage,
    Resolution,
)
from depclosure.core.dependency.resolver import (
    TransitiveDependencyResolver,
    assemble,
    resolve_dependencies,
)
from depclosure.core.dependency.versions import (
    LATEST_SUFFIX,
    NEXT_SUFFIX,
    ParsedVersion,
    compare_versions,
    core_version,
    parse_version,
    strip_marker,
    version_key,
)

__all__ = [
    "ClosureResult",
    "DependencyDetail",
    "DependencyGraph",
    "LATEST_SUFFIX",
    "NEXT_SUFFIX",
    "PackageClosure",
    "PackageDependency",
    "ParsedVersion",
    "ProjectPackage",
    "Resolution",
    "TransitiveDependencyResolver",
    "UNKNOWN_VERSION",
    "assemble",
    "compare_versions",
    "core_version",
    "expand",
    "parse_version",
    "resolve_dependencies",
    "strip_marker",
    "topological_sort",
    "version_key",
]
