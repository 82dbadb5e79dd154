"""Tests for DependencyGraph construction, external overlays, and ordering."""

from __future__ import annotations

from depclosure.core.dependency import (
    DependencyGraph,
    PackageDependency,
    ProjectPackage,
    topological_sort,
)


def _dep(name: str, version: str | None = None) -> PackageDependency:
    return PackageDependency(name, version)


def _pkg(name: str, *deps: PackageDependency) -> ProjectPackage:
    return ProjectPackage(name, "1.0.0.NEXT", tuple(deps))


class TestConstruction:
    """Tests for building graphs from packages."""

    def test_from_packages(self) -> None:
        graph = DependencyGraph.from_packages([_pkg("a"), _pkg("b", _dep("a", "1.0.0.LATEST"))])
        assert graph.packages == ["a", "b"]
        assert graph.direct_dependencies("b") == (_dep("a", "1.0.0.LATEST"),)
        assert graph.declared == frozenset({"a", "b"})
        assert len(graph) == 2
        assert "a" in graph
        assert "zzz" not in graph

    def test_unknown_package_has_no_edges(self) -> None:
        graph = DependencyGraph.from_packages([_pkg("a")])
        assert graph.direct_dependencies("missing") == ()

    def test_dangling_edges(self) -> None:
        graph = DependencyGraph.from_packages([_pkg("a", _dep("ghost", "1.0.0.1"))])
        assert graph.dangling_edges() == [("a", "ghost")]

    def test_edges_returns_copy(self) -> None:
        graph = DependencyGraph.from_packages([_pkg("a")])
        edges = graph.edges
        edges["b"] = ()
        assert "b" not in graph


class TestMergeExternal:
    """Tests for the external dependency overlay."""

    def test_adds_new_package(self) -> None:
        """An overlay key absent from the manifest is added as a package."""
        graph = DependencyGraph.from_packages(
            [_pkg("app", _dep("tech@2.0.0.38"))],
            {"tech@2.0.0.38": [_dep("sfdc")]},
        )
        assert "tech@2.0.0.38" in graph
        assert graph.direct_dependencies("tech@2.0.0.38") == (_dep("sfdc"),)
        assert "tech@2.0.0.38" not in graph.declared

    def test_replaces_existing_list(self) -> None:
        """An overlay entry replaces the package's edges wholesale."""
        graph = DependencyGraph.from_packages([_pkg("a", _dep("x"), _dep("y"))])
        merged = graph.merge_external({"a": [_dep("z", "1.0.0.1")]})
        assert merged.direct_dependencies("a") == (_dep("z", "1.0.0.1"),)

    def test_original_graph_unchanged(self) -> None:
        graph = DependencyGraph.from_packages([_pkg("a", _dep("x"))])
        graph.merge_external({"a": [], "b": [_dep("a")]})
        assert graph.packages == ["a"]
        assert graph.direct_dependencies("a") == (_dep("x"),)

    def test_input_packages_not_mutated(self) -> None:
        packages = [_pkg("a", _dep("x"))]
        DependencyGraph.from_packages(packages, {"a": [_dep("y")]})
        assert packages[0].dependencies == (_dep("x"),)


class TestTopologicalOrder:
    """Tests for canonical depth-first topological ordering."""

    def test_dependencies_come_first(self) -> None:
        graph = DependencyGraph.from_packages([
            _pkg("app", _dep("core")),
            _pkg("core", _dep("base")),
            _pkg("base"),
        ])
        assert graph.topological_order() == ["base", "core", "app"]

    def test_independent_of_declaration_order(self) -> None:
        packages = [
            _pkg("app", _dep("core"), _dep("util")),
            _pkg("core", _dep("base")),
            _pkg("util", _dep("base")),
            _pkg("base"),
        ]
        forward = DependencyGraph.from_packages(packages).topological_order()
        backward = DependencyGraph.from_packages(list(reversed(packages))).topological_order()
        assert forward == backward

    def test_declared_before_external(self) -> None:
        """Declared packages are visited before overlay-only names."""
        graph = DependencyGraph.from_packages(
            [_pkg("zeta"), _pkg("beta")],
            {"alpha@1": []},
        )
        assert graph.canonical(["alpha@1", "zeta", "beta"]) == ["beta", "zeta", "alpha@1"]
        assert graph.topological_order() == ["beta", "zeta", "alpha@1"]

    def test_dangling_targets_are_leaves(self) -> None:
        graph = DependencyGraph.from_packages([_pkg("a", _dep("ghost"))])
        assert graph.topological_order() == ["ghost", "a"]

    def test_empty_graph(self) -> None:
        assert DependencyGraph().topological_order() == []


class TestTopologicalSortFunction:
    """Tests for the module-level ``topological_sort``."""

    def test_each_name_once(self) -> None:
        edges = {
            "a": [_dep("b"), _dep("c")],
            "b": [_dep("c")],
            "c": [],
        }
        assert topological_sort(edges) == ["c", "b", "a"]

    def test_self_edge_ignored(self) -> None:
        assert topological_sort({"a": [_dep("a")]}) == ["a"]

    def test_custom_order(self) -> None:
        edges = {"a": [], "b": []}
        assert topological_sort(edges, order=lambda names: sorted(names, reverse=True)) == ["b", "a"]
