"""Resolver settings read from the manifest's plugin section.

The manifest carries tool configuration under ``plugins.sfp``::

    "plugins": {
        "sfp": {
            "disableTransitiveDependencyResolver": false,
            "externalDependencyMap": {
                "tech-framework@2.0.0.38": [{"package": "sfdc-framework"}]
            }
        }
    }
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from depclosure.core.dependency import PackageDependency
from depclosure.exceptions import ManifestError

logger = logging.getLogger(__name__)

PLUGIN_KEY = "sfp"


@dataclass(frozen=True)
class ResolverSettings:
    """Configuration for transitive dependency resolution.

    Attributes:
        disabled: True when the manifest opts out of transitive resolution;
            packages then keep their direct dependencies only.
        external_dependency_map: Package name -> dependency list overriding
            that package's dependencies in the graph.
    """

    disabled: bool = False
    external_dependency_map: dict[str, tuple[PackageDependency, ...]] = field(default_factory=dict)


def check_version_number(value: Any, where: str) -> None:
    """Reject a ``versionNumber`` that is present but not a string."""
    if value is not None and not isinstance(value, str):
        raise ManifestError(
            f"versionNumber of {where} must be a string, got {type(value).__name__}"
        )


def parse_dependency_list(raw: Any, owner: str) -> tuple[PackageDependency, ...]:
    """Parse a manifest ``dependencies`` array.

    Raises:
        ManifestError: If *raw* is not a list, an entry has no package name,
            or an entry's version is not a string.
    """
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ManifestError(f"Dependencies of {owner!r} must be a list, got {type(raw).__name__}")
    deps = []
    for entry in raw:
        if not isinstance(entry, dict) or not isinstance(entry.get("package"), str):
            raise ManifestError(f"Dependency entry of {owner!r} has no package name: {entry!r}")
        where = f"dependency {entry['package']!r} of {owner!r}"
        check_version_number(entry.get("versionNumber"), where)
        deps.append(PackageDependency.from_dict(entry))
    return tuple(deps)


def _object(value: Any, where: str) -> dict[str, Any]:
    """Return *value* as a JSON object; an absent (None) value is empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ManifestError(f"{where} must be an object, got {type(value).__name__}")
    return value


def load_settings(document: dict[str, Any], declared: Iterable[str] = ()) -> ResolverSettings:
    """Read ``ResolverSettings`` from a manifest document.

    External map entries that name a package declared in the manifest are
    dropped: declared packages list their dependencies in the manifest.

    Args:
        document: Parsed manifest JSON.
        declared: Names of packages declared in ``packageDirectories``.

    Returns:
        The settings, with defaults for anything not configured.
    """
    plugins = _object(document.get("plugins"), "plugins")
    plugin = _object(plugins.get(PLUGIN_KEY), f"plugins.{PLUGIN_KEY}")
    raw_map = _object(plugin.get("externalDependencyMap"), "externalDependencyMap")

    declared = set(declared)
    external: dict[str, tuple[PackageDependency, ...]] = {}
    for name, raw in raw_map.items():
        if name in declared:
            logger.warning(
                "Ignoring external dependency entry for %s: it is declared in packageDirectories",
                name,
            )
            continue
        external[name] = parse_dependency_list(raw, name)

    return ResolverSettings(
        disabled=bool(plugin.get("disableTransitiveDependencyResolver", False)),
        external_dependency_map=external,
    )
