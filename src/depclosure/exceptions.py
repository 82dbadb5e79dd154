"""depclosure exception hierarchy.

All public exceptions inherit from DepClosureError, giving callers a single
base class to catch when they want to handle any depclosure-specific failure
without swallowing unrelated errors.
"""

from __future__ import annotations


class DepClosureError(Exception):
    """Base exception for all depclosure errors."""


class ResolutionError(DepClosureError):
    """Raised when transitive dependency resolution fails."""


class CircularDependencyError(ResolutionError):
    """Raised when the dependency graph contains a cycle.

    Resolution is all-or-nothing: a single cycle anywhere in the graph
    aborts the whole run, not just the packages on the cycle.

    Attributes:
        chain: The active traversal path followed by the repeated package,
            e.g. ``["package-a", "package-b", "package-a"]``.
    """

    def __init__(self, chain: list[str]) -> None:
        self.chain = list(chain)
        super().__init__(
            f"Circular dependency detected: {' -> '.join(self.chain)}. "
            "Circular dependencies between packages are not supported."
        )


class ManifestError(DepClosureError):
    """Raised when a project manifest cannot be read or is structurally invalid.

    Covers missing files, invalid JSON, a ``packageDirectories`` section that
    is not a list, package entries without a name, and duplicate names.
    """


class VersionError(DepClosureError):
    """Raised when a version bump would produce an invalid version number."""


class BumpError(DepClosureError):
    """Raised when a version bump cannot be planned.

    Covers unknown target packages, a missing selection mode, and failures
    while listing changed files from git.
    """


class MalformedVersionWarning(UserWarning):
    """Category for version strings that were coerced instead of parsed."""
