"""Package dependency graph: construction, external overlays, and ordering.

The graph is an arena of direct dependency edges keyed by package name. It
is built fresh for every resolution from the caller's package list, so the
caller's objects are never touched, and it is never mutated once built:
``merge_external`` returns a new graph.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence

from depclosure.core.dependency.models import PackageDependency, ProjectPackage

logger = logging.getLogger(__name__)

Edges = Mapping[str, Sequence[PackageDependency]]


class DependencyGraph:
    """Direct dependency edges of every package in a project.

    Packages declared in the manifest are tracked separately from names that
    only enter the graph through an external overlay, because the canonical
    ordering places declared packages first.
    """

    def __init__(
        self,
        edges: Mapping[str, Iterable[PackageDependency]] | None = None,
        declared: Iterable[str] | None = None,
    ) -> None:
        self._edges: dict[str, tuple[PackageDependency, ...]] = {
            name: tuple(deps) for name, deps in (edges or {}).items()
        }
        self._declared = frozenset(self._edges if declared is None else declared)

    @classmethod
    def from_packages(
        cls,
        packages: Iterable[ProjectPackage],
        external_map: Mapping[str, Iterable[PackageDependency]] | None = None,
    ) -> DependencyGraph:
        """Build a graph from declared packages plus an optional external overlay.

        Args:
            packages: Packages in manifest order. A later entry with the same
                name replaces an earlier one.
            external_map: Dependency lists for packages whose metadata lives
                outside the manifest; see ``merge_external``.

        Returns:
            A new ``DependencyGraph``.
        """
        edges = {pkg.name: pkg.dependencies for pkg in packages}
        graph = cls(edges)
        if external_map:
            graph = graph.merge_external(external_map)
        for name, target in graph.dangling_edges():
            logger.debug("Package %s depends on %s, which is not in the graph", name, target)
        return graph

    def merge_external(
        self, external_map: Mapping[str, Iterable[PackageDependency]]
    ) -> DependencyGraph:
        """Overlay externally declared dependency lists onto the graph.

        Every key of *external_map* replaces that package's dependency list
        wholesale, adding the package if it was not present. Typical keys are
        version-pinned aliases of third-party packages whose own dependencies
        cannot be declared in the manifest.

        Returns:
            A new graph; ``self`` is left unchanged.
        """
        edges: dict[str, Iterable[PackageDependency]] = dict(self._edges)
        for name, deps in external_map.items():
            logger.info("Applying external dependency entry for %s", name)
            edges[name] = tuple(deps)
        return DependencyGraph(edges, declared=self._declared)

    # -- Queries --------------------------------------------------------------

    @property
    def packages(self) -> list[str]:
        """Package names in insertion order."""
        return list(self._edges)

    @property
    def declared(self) -> frozenset[str]:
        """Names of packages declared in the manifest itself."""
        return self._declared

    @property
    def edges(self) -> dict[str, tuple[PackageDependency, ...]]:
        """A shallow copy of the direct-edge map."""
        return dict(self._edges)

    def direct_dependencies(self, name: str) -> tuple[PackageDependency, ...]:
        """Direct edges of *name*; empty for unknown packages."""
        return self._edges.get(name, ())

    def dangling_edges(self) -> list[tuple[str, str]]:
        """``(consumer, target)`` pairs whose target has no entry in the graph."""
        return [
            (name, dep.package)
            for name, deps in self._edges.items()
            for dep in deps
            if dep.package not in self._edges
        ]

    def canonical(self, names: Iterable[str]) -> list[str]:
        """Sort names with declared packages first, alphabetically within groups."""
        return sorted(names, key=lambda n: (n not in self._declared, n))

    def topological_order(self, edges: Edges | None = None) -> list[str]:
        """Order packages so every package follows all of its dependencies.

        Args:
            edges: Edge map to order, defaulting to the graph's own direct
                edges. The resolver passes the expanded (transitive) map.

        Returns:
            Every package name and every dependency target, in build order.
        """
        return topological_sort(self._edges if edges is None else edges, self.canonical)

    def __contains__(self, name: object) -> bool:
        return name in self._edges

    def __iter__(self) -> Iterator[str]:
        return iter(self._edges)

    def __len__(self) -> int:
        return len(self._edges)


def topological_sort(
    edges: Edges, order: Callable[[Iterable[str]], list[str]] = sorted
) -> list[str]:
    """Depth-first post-order topological sort.

    Each name is visited once; its dependency targets are visited first and
    the name is appended afterwards, so dependencies always precede their
    dependents. Targets missing from *edges* are leaves and self-edges are
    ignored. Cycles are not reported here; the closure engine rejects them
    before ordering is attempted.

    Args:
        edges: Package name -> dependency edges.
        order: Callable fixing the visiting order of roots and of each
            package's targets, which makes the result independent of the
            iteration order of *edges*.

    Returns:
        All names reachable from *edges*, dependencies first.
    """
    visited: set[str] = set()
    result: list[str] = []

    def _visit(name: str) -> None:
        if name in visited:
            return
        visited.add(name)
        targets = {dep.package for dep in edges.get(name, ())}
        for target in order(targets):
            _visit(target)
        result.append(name)

    for name in order(edges):
        _visit(name)

    return result
