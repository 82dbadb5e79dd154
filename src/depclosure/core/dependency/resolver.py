"""Transitive dependency resolution for a project's packages.

Pipeline::

    packages + external map
        -> DependencyGraph        (direct edges, external overlay applied)
        -> expand()               (transitive closure, cycle detection)
        -> topological order      (global build order)
        -> assemble()             (dedupe, order each list, provenance)

The resolver keeps no state between calls. Each call builds its own graph
from the caller's packages and leaves those packages untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from depclosure.core.dependency.closure import ClosureResult, expand
from depclosure.core.dependency.graph import DependencyGraph
from depclosure.core.dependency.models import (
    UNKNOWN_VERSION,
    DependencyDetail,
    PackageDependency,
    ProjectPackage,
    Resolution,
)
from depclosure.core.dependency.versions import compare_versions

logger = logging.getLogger(__name__)


def _dedupe(deps: Iterable[PackageDependency]) -> list[PackageDependency]:
    """Keep one edge per package name: the highest version, first seen on ties."""
    unique: dict[str, PackageDependency] = {}
    for dep in deps:
        existing = unique.get(dep.package)
        if existing is None or compare_versions(dep.version, existing.version) > 0:
            unique[dep.package] = dep
    return list(unique.values())


def assemble(
    order: list[str],
    closure: ClosureResult,
    graph: DependencyGraph,
) -> Resolution:
    """Build the final resolution from the closure and the global order.

    Args:
        order: Global topological order of all package names.
        closure: Output of ``expand`` for *graph*.
        graph: The direct (pre-expansion) graph, used to flag direct
            dependencies.

    Returns:
        A ``Resolution`` covering every name in *order*.
    """
    position = {name: index for index, name in enumerate(order)}
    expanded = closure.expanded
    resolution = Resolution(order=list(order))

    for name in order:
        deps = _dedupe(expanded.get(name, ()))
        deps.sort(key=lambda dep: position.get(dep.package, len(position)))
        resolution.resolved_dependencies[name] = deps
        if not deps:
            continue

        direct = set(graph.direct_dependencies(name))
        resolution.details[name] = {
            dep.package: DependencyDetail(
                version=dep.version or UNKNOWN_VERSION,
                is_direct=dep in direct,
                contributors=closure.contributors(name, dep),
            )
            for dep in deps
        }

    return resolution


class TransitiveDependencyResolver:
    """Resolve the full, ordered dependency list of every package.

    Args:
        packages: Packages as declared in the project manifest.
        external_dependency_map: Dependency lists for packages whose own
            metadata is not in the manifest (for example version-pinned
            aliases of third-party packages). Each entry replaces the named
            package's dependencies.

    Example::

        resolver = TransitiveDependencyResolver([
            ProjectPackage("base", "1.0.0.NEXT"),
            ProjectPackage("core", "1.0.0.NEXT",
                           (PackageDependency("base", "1.0.0.LATEST"),)),
            ProjectPackage("app", "1.0.0.NEXT",
                           (PackageDependency("core", "1.0.0.LATEST"),)),
        ])
        resolver.resolve()["app"]
        # [PackageDependency("base", "1.0.0.LATEST"),
        #  PackageDependency("core", "1.0.0.LATEST")]
    """

    def __init__(
        self,
        packages: Iterable[ProjectPackage],
        external_dependency_map: Mapping[str, Iterable[PackageDependency]] | None = None,
    ) -> None:
        self._packages = tuple(packages)
        self._external_map = {
            name: tuple(deps) for name, deps in (external_dependency_map or {}).items()
        }

    def resolve(self) -> dict[str, list[PackageDependency]]:
        """Return only the resolved dependency lists."""
        return self.resolve_with_details().resolved_dependencies

    def resolve_with_details(self) -> Resolution:
        """Resolve dependencies and report where each one came from.

        Returns:
            The ``Resolution`` with resolved lists, provenance details, and
            the global build order.

        Raises:
            CircularDependencyError: If the dependency graph has a cycle.
        """
        logger.info("Validating project dependencies...")
        graph = DependencyGraph.from_packages(self._packages, self._external_map)
        closure = expand(graph)
        order = graph.topological_order(closure.expanded)
        resolution = assemble(order, closure, graph)
        _log_details(resolution)
        return resolution


def _log_details(resolution: Resolution) -> None:
    for name, entries in resolution.details.items():
        logger.debug("Package: %s", name)
        for dep_name, detail in entries.items():
            if detail.is_direct:
                how = " (direct dependency)"
            elif detail.contributors:
                how = f" (via {', '.join(detail.contributors)})"
            else:
                how = ""
            logger.debug("  %s@%s%s", dep_name, detail.version, how)


def resolve_dependencies(
    packages: Iterable[ProjectPackage],
    external_dependency_map: Mapping[str, Iterable[PackageDependency]] | None = None,
) -> Resolution:
    """Shorthand for ``TransitiveDependencyResolver(...).resolve_with_details()``."""
    return TransitiveDependencyResolver(packages, external_dependency_map).resolve_with_details()
