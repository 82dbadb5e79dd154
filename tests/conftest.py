"""Shared fixtures for depclosure tests."""

from __future__ import annotations

import copy
import json
from pathlib import Path

import pytest

_PROJECT_CONFIG = {
    "packageDirectories": [
        {
            "path": "packages/base",
            "default": True,
            "package": "base",
            "versionName": "temp",
            "versionNumber": "1.0.2.NEXT",
        },
        {
            "path": "packages/temp",
            "default": True,
            "package": "temp",
            "versionName": "temp",
            "versionNumber": "1.0.0.NEXT",
            "dependencies": [
                {"package": "base", "versionNumber": "1.0.2.LATEST"},
            ],
        },
        {
            "path": "packages/core",
            "package": "core",
            "default": False,
            "versionName": "core-1.0.0",
            "versionNumber": "1.0.0.NEXT",
            "dependencies": [
                {"package": "temp", "versionNumber": "1.0.0.LATEST"},
            ],
        },
        {
            "path": "packages/candidate-management",
            "package": "candidate-management",
            "default": False,
            "versionName": "candidate-management-1.0.0",
            "versionNumber": "1.0.0.NEXT",
            "dependencies": [
                {"package": "tech-framework@2.0.0.38"},
                {"package": "core", "versionNumber": "1.0.0.LATEST"},
            ],
        },
        {
            "path": "packages/contact-management",
            "package": "contact-management",
            "default": False,
            "versionName": "contact-management-1.0.0",
            "versionNumber": "1.0.0.NEXT",
            "dependencies": [
                {"package": "tech-framework@2.0.0.38"},
                {"package": "core", "versionNumber": "1.0.0.LATEST"},
                {"package": "candidate-management", "versionNumber": "1.0.0.LATEST"},
            ],
        },
        {
            "path": "packages/quote-management",
            "package": "quote-management",
            "default": False,
            "versionName": "quote-management-1.0.0",
            "versionNumber": "1.0.0.NEXT",
            "dependencies": [
                {"package": "tech-framework@2.0.0.38"},
                {"package": "core", "versionNumber": "1.2.0.LATEST"},
                {"package": "candidate-management", "versionNumber": "1.0.0.LATEST"},
            ],
        },
    ],
    "namespace": "",
    "sfdcLoginUrl": "https://login.salesforce.com",
    "sourceApiVersion": "50.0",
    "packageAliases": {
        "tech-framework@2.0.0.38": "04t1P00000xxxxxx00",
        "candidate-management": "0Ho4a00000000xxxx1",
        "base": "0Ho4a00000000xxxx1",
        "temp": "0Ho4a00000000xxxx1",
        "core": "0Ho4a00000000xxxx1",
        "contact-management": "0Ho4a00000000xxxx2",
        "sfdc-framework": "04t1000x00x00x",
    },
    "plugins": {
        "sfp": {
            "disableTransitiveDependencyResolver": False,
            "externalDependencyMap": {
                "tech-framework@2.0.0.38": [
                    {"package": "sfdc-framework"},
                ],
            },
        },
    },
}


@pytest.fixture
def project_config() -> dict:
    """A six-package manifest with an external dependency overlay."""
    return copy.deepcopy(_PROJECT_CONFIG)


@pytest.fixture
def manifest_file(tmp_path: Path, project_config: dict) -> Path:
    """Write ``project_config`` to ``sfdx-project.json`` in a temp directory."""
    path = tmp_path / "sfdx-project.json"
    path.write_text(json.dumps(project_config, indent=2))
    return path
