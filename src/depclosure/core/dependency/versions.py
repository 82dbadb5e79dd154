"""Version parsing and the comparator used for dependency arbitration.

Package versions in a project manifest look like ``MAJOR.MINOR.PATCH.BUILD``
where the fourth segment is either a numeric build number or a floating
marker:

- ``1.2.0.NEXT``   -- the next version to be built.
- ``1.2.0.LATEST`` -- the most recent version already built.
- ``1.2.0.7``      -- a pinned build.

Ordering rules, applied in order:

1. A missing version sorts below any present version.
2. A floating version (``NEXT``/``LATEST``) sorts above any pinned version,
   whatever the numbers say.
3. Otherwise the first three segments are compared numerically.
4. The build number breaks remaining ties (absent build number is zero).

Parsing is lenient. A segment that is not a number is coerced to zero and
a ``MalformedVersionWarning`` is emitted, so one bad manifest entry cannot
block resolution of a whole project.
"""

from __future__ import annotations

import re
import warnings
from dataclasses import dataclass

from depclosure.exceptions import MalformedVersionWarning

NEXT_MARKER = "NEXT"
LATEST_MARKER = "LATEST"
NEXT_SUFFIX = f".{NEXT_MARKER}"
LATEST_SUFFIX = f".{LATEST_MARKER}"

_MARKER_RE = re.compile(r"\.(?P<marker>LATEST|NEXT)$")
_DIGITS_RE = re.compile(r"[0-9]+")
_LEADING_DIGITS_RE = re.compile(r"^\s*([0-9]+)")


@dataclass(frozen=True)
class ParsedVersion:
    """A version string broken into comparable parts.

    Attributes:
        raw: The version string as written in the manifest.
        core: ``(major, minor, patch)``; missing segments are zero.
        build: Build number from the fourth segment, zero when absent.
        marker: ``"NEXT"``, ``"LATEST"`` or None.
        malformed: True if any segment had to be coerced to a number.
    """

    raw: str
    core: tuple[int, int, int]
    build: int = 0
    marker: str | None = None
    malformed: bool = False

    @property
    def is_floating(self) -> bool:
        return self.marker is not None

    @property
    def sort_key(self) -> tuple[bool, tuple[int, int, int], int]:
        return (self.is_floating, self.core, self.build)


def _coerce_segment(segment: str) -> tuple[int, bool]:
    """Return ``(value, malformed)`` for a single dotted segment."""
    if _DIGITS_RE.fullmatch(segment):
        return int(segment), False
    m = _LEADING_DIGITS_RE.match(segment)
    if m:
        return int(m.group(1)), True
    return 0, True


def strip_marker(version: str) -> str:
    """Remove a trailing ``.NEXT``/``.LATEST`` marker, if any."""
    return _MARKER_RE.sub("", version)


def parse_version(version: str) -> ParsedVersion:
    """Parse a manifest version string, coercing malformed segments to zero.

    Never raises for bad input; check ``ParsedVersion.malformed`` instead.

    Args:
        version: Version string such as ``"1.2.0.LATEST"`` or ``"1.0.0.5"``.

    Returns:
        The parsed version.
    """
    m = _MARKER_RE.search(version)
    marker = m.group("marker") if m else None
    parts = strip_marker(version).split(".")

    malformed = False
    numbers: list[int] = []
    for segment in parts[:4]:
        value, bad = _coerce_segment(segment)
        numbers.append(value)
        malformed = malformed or bad
    numbers.extend([0] * (4 - len(numbers)))

    if malformed:
        warnings.warn(
            f"Malformed version {version!r}: non-numeric segments treated as 0",
            MalformedVersionWarning,
            stacklevel=2,
        )

    return ParsedVersion(
        raw=version,
        core=(numbers[0], numbers[1], numbers[2]),
        build=numbers[3],
        marker=marker,
        malformed=malformed,
    )


def version_key(version: str | None) -> tuple:
    """Sort key implementing the comparator ordering; None sorts lowest."""
    if not version:
        return (0,)
    return (1, parse_version(version).sort_key)


def compare_versions(first: str | None, second: str | None) -> int:
    """Compare two manifest versions.

    Args:
        first: Version string or None.
        second: Version string or None.

    Returns:
        A negative number if *first* is older, zero if they are equivalent,
        a positive number if *first* is newer.
    """
    a = version_key(first)
    b = version_key(second)
    return (a > b) - (a < b)


def core_version(version: str) -> str:
    """Return the ``MAJOR.MINOR.PATCH`` part of *version* as written."""
    return ".".join(strip_marker(version).split(".")[:3])
