"""Project manifest reading, querying, and writing.

``ProjectManifest`` wraps the raw JSON document of a project manifest
(``sfdx-project.json``). It never modifies that document in place: the
``with_*`` methods return updated copies, and unknown keys survive a
read/modify/write round trip untouched.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from depclosure.core.dependency import (
    PackageDependency,
    ProjectPackage,
    Resolution,
    TransitiveDependencyResolver,
)
from depclosure.core.manifest.settings import (
    ResolverSettings,
    check_version_number,
    load_settings,
    parse_dependency_list,
)
from depclosure.exceptions import ManifestError

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST = "sfdx-project.json"


def _parse_packages(document: dict[str, Any]) -> list[ProjectPackage]:
    directories = document.get("packageDirectories", [])
    if not isinstance(directories, list):
        raise ManifestError("packageDirectories must be a list")

    packages: list[ProjectPackage] = []
    seen: set[str] = set()
    for entry in directories:
        if not isinstance(entry, dict):
            raise ManifestError(f"Invalid packageDirectories entry: {entry!r}")
        name = entry.get("package")
        if name is None:
            logger.debug("Skipping source-only directory %s", entry.get("path"))
            continue
        if not isinstance(name, str) or not name:
            raise ManifestError(f"Invalid package name: {name!r}")
        if name in seen:
            raise ManifestError(f"Duplicate package name in manifest: {name!r}")
        seen.add(name)
        check_version_number(entry.get("versionNumber"), f"package {name!r}")
        path = entry.get("path")
        if path is not None and not isinstance(path, str):
            raise ManifestError(
                f"path of package {name!r} must be a string, got {type(path).__name__}"
            )
        packages.append(
            ProjectPackage(
                name=name,
                version=entry.get("versionNumber"),
                dependencies=parse_dependency_list(entry.get("dependencies"), name),
                path=path,
            )
        )
    return packages


class ProjectManifest:
    """A parsed project manifest.

    Example::

        manifest = ProjectManifest.read(Path("sfdx-project.json"))
        resolution = manifest.resolve()
        manifest.write(Path("sfdx-project.json"),
                       manifest.with_resolved_dependencies(resolution))
    """

    def __init__(self, document: dict[str, Any]) -> None:
        if not isinstance(document, dict):
            raise ManifestError("Manifest root must be a JSON object")
        self._document = copy.deepcopy(document)
        self._packages = _parse_packages(self._document)
        self._settings = load_settings(self._document, (p.name for p in self._packages))

    # -- Construction -----------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectManifest:
        return cls(data)

    @classmethod
    def from_json(cls, text: str) -> ProjectManifest:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ManifestError(f"Manifest is not valid JSON: {exc}") from exc
        return cls(data)

    @classmethod
    def read(cls, path: Path) -> ProjectManifest:
        """Load a manifest from disk.

        Raises:
            ManifestError: If the file cannot be read or parsed.
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc
        return cls.from_json(text)

    # -- Queries ----------------------------------------------------------------

    @property
    def document(self) -> dict[str, Any]:
        """A deep copy of the raw manifest document."""
        return copy.deepcopy(self._document)

    @property
    def packages(self) -> list[ProjectPackage]:
        return list(self._packages)

    @property
    def settings(self) -> ResolverSettings:
        return self._settings

    def package(self, name: str) -> ProjectPackage | None:
        for pkg in self._packages:
            if pkg.name == name:
                return pkg
        return None

    def direct_dependencies(self) -> dict[str, list[PackageDependency]]:
        """Declared dependencies per package, unexpanded."""
        return {pkg.name: list(pkg.dependencies) for pkg in self._packages}

    # -- Resolution ---------------------------------------------------------------

    def resolver(self) -> TransitiveDependencyResolver:
        return TransitiveDependencyResolver(
            self._packages, self._settings.external_dependency_map
        )

    def resolve(self) -> Resolution:
        """Resolve transitive dependencies of every declared package."""
        return self.resolver().resolve_with_details()

    # -- Updates ------------------------------------------------------------------

    def with_resolved_dependencies(self, resolution: Resolution) -> dict[str, Any]:
        """Return a document whose dependency lists are the resolved ones.

        Packages with an empty resolved list keep their original entry.
        """
        document = self.document
        for entry in document.get("packageDirectories", []):
            deps = resolution.resolved_dependencies.get(entry.get("package"))
            if deps:
                entry["dependencies"] = [dep.to_dict() for dep in deps]
        return document

    def with_package_updates(self, updates: Mapping[str, dict[str, Any]]) -> dict[str, Any]:
        """Return a document with package entries merged with *updates*.

        Args:
            updates: Package name -> manifest fields to overwrite, such as
                ``{"versionNumber": "1.1.0.NEXT", "dependencies": [...]}``.
        """
        document = self.document
        for entry in document.get("packageDirectories", []):
            fields = updates.get(entry.get("package"))
            if fields:
                entry.update(copy.deepcopy(fields))
        return document

    def write(self, path: Path, document: dict[str, Any] | None = None) -> None:
        """Write *document* (default: this manifest) as indented JSON."""
        payload = self._document if document is None else document
        Path(path).write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        logger.info("Wrote manifest %s", path)
