"""Shared fixtures for CLI tests.

Builds manifest files in temporary directories: a project with a
circular dependency, and one with transitive resolution switched off.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def circular_manifest(tmp_path: Path) -> Path:
    """Two packages that depend on each other."""
    path = tmp_path / "sfdx-project.json"
    path.write_text(json.dumps({
        "packageDirectories": [
            {
                "path": "packages/a",
                "package": "package-a",
                "versionNumber": "1.0.0.NEXT",
                "dependencies": [{"package": "package-b", "versionNumber": "1.0.0.LATEST"}],
            },
            {
                "path": "packages/b",
                "package": "package-b",
                "versionNumber": "1.0.0.NEXT",
                "dependencies": [{"package": "package-a", "versionNumber": "1.0.0.LATEST"}],
            },
        ],
    }))
    return path


@pytest.fixture
def disabled_manifest(tmp_path: Path, project_config: dict) -> Path:
    """The shared project with transitive resolution disabled."""
    project_config["plugins"]["sfp"]["disableTransitiveDependencyResolver"] = True
    path = tmp_path / "sfdx-project.json"
    path.write_text(json.dumps(project_config))
    return path
