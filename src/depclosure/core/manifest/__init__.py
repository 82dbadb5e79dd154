"""Project manifest loading and resolver configuration.

- ``manifest``: ``ProjectManifest`` for reading, resolving, and writing
  ``sfdx-project.json`` style manifests.
- ``settings``: ``ResolverSettings`` read from the manifest's plugin section.
"""

from depclosure.core.manifest.manifest import DEFAULT_MANIFEST, ProjectManifest
from depclosure.core.manifest.settings import (
    PLUGIN_KEY,
    ResolverSettings,
    load_settings,
    parse_dependency_list,
)

__all__ = [
    "DEFAULT_MANIFEST",
    "PLUGIN_KEY",
    "ProjectManifest",
    "ResolverSettings",
    "load_settings",
    "parse_dependency_list",
]
