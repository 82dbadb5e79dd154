"""Transitive closure of package dependencies.

For every package the engine walks its dependency edges depth-first and
collects every package reachable from it. When the same package is reached
with different pinned versions, the higher one (by ``compare_versions``)
wins. Along the way it records *contributors*: for each ``(dependency,
version)`` pair in a package's closure, which package introduced it.

Cycle detection uses the active traversal path only. The path is passed
down as an immutable tuple, so two sibling branches that both reach the
same package never see each other and a diamond is not mistaken for a
cycle. Any cycle aborts the whole expansion.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from depclosure.core.dependency.graph import DependencyGraph
from depclosure.core.dependency.models import PackageDependency
from depclosure.core.dependency.versions import compare_versions
from depclosure.exceptions import CircularDependencyError

logger = logging.getLogger(__name__)

ContributorKey = tuple[str, str | None]


@dataclass
class PackageClosure:
    """The arbitrated transitive dependencies of a single package.

    Attributes:
        entries: Dependency name -> winning edge, in discovery order.
        contributors: ``(dependency, version)`` -> names of the packages that
            introduced that exact version into this closure.
    """

    entries: dict[str, PackageDependency] = field(default_factory=dict)
    contributors: dict[ContributorKey, set[str]] = field(default_factory=dict)

    def offer(self, dep: PackageDependency, contributor: str) -> None:
        """Record *dep* unless an equal or higher version is already held.

        Equal versions keep the first edge recorded and add *contributor* to
        that edge's contributor set.
        """
        existing = self.entries.get(dep.package)
        if existing is None:
            cmp = 1
        else:
            cmp = compare_versions(dep.version, existing.version)
        if cmp > 0:
            self.entries[dep.package] = dep
            self.contributors.setdefault((dep.package, dep.version), set()).add(contributor)
        elif cmp == 0:
            self.contributors.setdefault((existing.package, existing.version), set()).add(contributor)

    @property
    def dependencies(self) -> list[PackageDependency]:
        return list(self.entries.values())


@dataclass
class ClosureResult:
    """Output of ``expand``: one ``PackageClosure`` per package in the graph."""

    closures: dict[str, PackageClosure] = field(default_factory=dict)

    @property
    def expanded(self) -> dict[str, list[PackageDependency]]:
        """Package name -> transitive dependency edges."""
        return {name: c.dependencies for name, c in self.closures.items()}

    def contributors(self, package: str, dep: PackageDependency) -> list[str]:
        """Sorted contributors of *dep* within *package*'s closure."""
        closure = self.closures.get(package)
        if closure is None:
            return []
        return sorted(closure.contributors.get((dep.package, dep.version), ()))


def expand(graph: DependencyGraph) -> ClosureResult:
    """Compute the transitive closure of every package in *graph*.

    Only packages that have an entry in the graph are descended into;
    dependency targets without one are kept as leaf edges.

    Args:
        graph: Direct dependency graph. It is read, never modified.

    Returns:
        The closure of every package in the graph.

    Raises:
        CircularDependencyError: If any package can reach itself. The error
            carries the traversal path that closed the loop.
    """
    done: dict[str, PackageClosure] = {}

    def _expand(name: str, path: tuple[str, ...]) -> PackageClosure:
        if name in path:
            err = CircularDependencyError([*path, name])
            logger.error("%s", err)
            raise err
        if name in done:
            return done[name]

        logger.debug("Fetching dependencies for package: %s", name)
        path = (*path, name)
        closure = PackageClosure()
        direct = graph.direct_dependencies(name)

        for dep in direct:
            closure.offer(dep, name)

        for dep in direct:
            if dep.package not in graph:
                continue
            for inherited in _expand(dep.package, path).dependencies:
                closure.offer(inherited, dep.package)

        done[name] = closure
        return closure

    for name in graph:
        _expand(name, ())

    return ClosureResult(closures={name: done[name] for name in graph})
