"""Tests for BumpPlanner selection, propagation, and git change detection."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from depclosure.core.bump import BumpPlanner, git_changed_files
from depclosure.core.dependency import ProjectPackage
from depclosure.core.manifest import ProjectManifest
from depclosure.exceptions import BumpError


@pytest.fixture
def planner(project_config: dict) -> BumpPlanner:
    return BumpPlanner(ProjectManifest.from_dict(project_config).packages)


class TestSelection:
    """Tests for choosing which packages to bump."""

    def test_select_package(self, planner: BumpPlanner) -> None:
        assert [p.name for p in planner.select_package("core")] == ["core"]

    def test_select_unknown_package(self, planner: BumpPlanner) -> None:
        with pytest.raises(BumpError, match="Package nope not found in manifest"):
            planner.select_package("nope")

    def test_select_all(self, planner: BumpPlanner) -> None:
        assert len(planner.select_all()) == 6

    def test_select_changed_by_path(self, planner: BumpPlanner) -> None:
        selected = planner.select_changed("main", changed_files=[
            "packages/core/main/default/classes/Foo.cls",
            "packages/core-extra/file.txt",
            "README.md",
        ])
        assert [p.name for p in selected] == ["core"]

    def test_select_changed_nothing(self, planner: BumpPlanner) -> None:
        assert planner.select_changed("main", changed_files=[]) == []

    @pytest.mark.parametrize("path", [".", "./", "././"])
    def test_package_at_project_root(self, path: str) -> None:
        """A package rooted at the manifest directory owns every changed file."""
        planner = BumpPlanner([ProjectPackage("root", "1.0.0.NEXT", path=path)])
        selected = planner.select_changed("main", changed_files=["force-app/main/Foo.cls"])
        assert [p.name for p in selected] == ["root"]

    def test_dot_slash_prefix_ignored(self) -> None:
        planner = BumpPlanner([ProjectPackage("core", "1.0.0.NEXT", path="./packages/core/")])
        selected = planner.select_changed("main", changed_files=["packages/core/x.cls"])
        assert [p.name for p in selected] == ["core"]


class TestPlan:
    """Tests for bumping and propagating versions."""

    def test_dependents_repinned(self, planner: BumpPlanner) -> None:
        report = planner.plan(planner.select_package("base"))
        assert report.packages[0].new_version == "1.0.3.NEXT"
        assert [p.name for p in report.dependents] == ["temp"]
        assert report.dependents[0].dependency("base").new_version == "1.0.3.LATEST"
        assert not report.dependents[0].is_updated

    def test_increment_dependents(self, planner: BumpPlanner) -> None:
        report = planner.plan(planner.select_package("base"), increment_dependents=True)
        assert report.dependents[0].new_version == "1.0.1.NEXT"

    def test_minor_bump(self, planner: BumpPlanner) -> None:
        report = planner.plan(planner.select_package("core"), kind="minor")
        assert report.packages[0].new_version == "1.1.0.NEXT"
        names = sorted(p.name for p in report.dependents)
        assert names == ["candidate-management", "contact-management", "quote-management"]

    def test_custom_bump(self, planner: BumpPlanner) -> None:
        report = planner.plan(planner.select_package("core"), kind="custom", custom="4.0.0")
        assert report.packages[0].new_version == "4.0.0.NEXT"

    def test_to_dict_and_updates(self, planner: BumpPlanner) -> None:
        report = planner.plan(planner.select_package("base"))
        data = report.to_dict()
        assert data["packages"] == [{"package": "base", "versionNumber": "1.0.3.NEXT"}]
        assert data["dependencies"][0]["package"] == "temp"
        updates = report.manifest_updates()
        assert updates["base"] == {"versionNumber": "1.0.3.NEXT"}
        assert updates["temp"]["dependencies"] == [
            {"package": "base", "versionNumber": "1.0.3.LATEST"},
        ]


class TestGitChangedFiles:
    """Tests for ``git diff --name-only`` handling."""

    def test_parses_output(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(cmd, **kwargs):
            assert cmd == ["git", "diff", "--name-only", "--relative", "origin/main"]
            return subprocess.CompletedProcess(cmd, 0, stdout="a/b.txt\n\nc.txt\n", stderr="")

        monkeypatch.setattr(subprocess, "run", fake_run)
        assert git_changed_files("origin/main") == ["a/b.txt", "c.txt"]

    def test_runs_in_manifest_directory(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """The diff runs where the manifest lives so paths match package paths."""
        seen = {}

        def fake_run(cmd, **kwargs):
            seen.update(kwargs)
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

        monkeypatch.setattr(subprocess, "run", fake_run)
        git_changed_files("main", cwd=tmp_path)
        assert seen["cwd"] == str(tmp_path)

    def test_git_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(cmd, **kwargs):
            raise subprocess.CalledProcessError(128, cmd, stderr="fatal: bad revision\n")

        monkeypatch.setattr(subprocess, "run", fake_run)
        with pytest.raises(BumpError, match="bad revision"):
            git_changed_files("nope")

    def test_git_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(cmd, **kwargs):
            raise FileNotFoundError("git")

        monkeypatch.setattr(subprocess, "run", fake_run)
        with pytest.raises(BumpError, match="git executable not found"):
            git_changed_files("main")
