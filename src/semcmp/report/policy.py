"""Release policy: which version component a report forces to change.

Severity maps onto the semantic-version bump a maintainer has to make:

    DEBUG, NOTE      -> NONE   (no compatibility impact)
    WARNING          -> PATCH  (something could not be verified)
    MINOR, BREAKING  -> MINOR  (additions, or breakage the RFC tolerates)
    MAJOR, ERROR     -> MAJOR  (breaking, or the tool could not tell)

Pre-1.0 libraries follow the usual convention that the left-most non-zero
component is the "major" one: for ``0.y.z`` a ``y`` increment is a major
bump and a ``z`` increment a minor one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum

from ..exceptions import InvalidVersionError
from .models import Severity

_VERSION_RE = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?$"
)


class Bump(IntEnum):
    """Version component that changes between two releases."""

    NONE = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3


_BUMP_FOR_SEVERITY = {
    Severity.DEBUG: Bump.NONE,
    Severity.NOTE: Bump.NONE,
    Severity.WARNING: Bump.PATCH,
    Severity.MINOR: Bump.MINOR,
    Severity.BREAKING: Bump.MINOR,
    Severity.MAJOR: Bump.MAJOR,
    Severity.ERROR: Bump.MAJOR,
}


def required_bump(severity: Severity) -> Bump:
    """Smallest bump that is acceptable for changes of this severity."""
    return _BUMP_FOR_SEVERITY[severity]


@dataclass(frozen=True, order=True)
class Version:
    """A MAJOR.MINOR.PATCH release number (pre-release/build tags ignored)."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_version(text: str) -> Version:
    """Parse ``"1.2.3"`` (optionally ``v``-prefixed or tagged) into a Version.

    Raises:
        InvalidVersionError: If ``text`` is not a semantic version.
    """
    match = _VERSION_RE.match(text.strip())
    if match is None:
        raise InvalidVersionError(text)
    return Version(int(match["major"]), int(match["minor"]), int(match["patch"]))


def actual_bump(old: Version, new: Version) -> Bump:
    """Classify the bump made between two releases.

    A release that goes backwards (or stays put) counts as NONE.
    """
    if new <= old:
        return Bump.NONE
    if new.major != old.major:
        return Bump.MAJOR
    if old.major == 0:
        # 0.y.z: y acts as the major component, z as the minor one
        if new.minor != old.minor:
            return Bump.MAJOR
        return Bump.MINOR
    if new.minor != old.minor:
        return Bump.MINOR
    return Bump.PATCH


def check_version_bump(old: str, new: str, required: Bump) -> bool:
    """Return True if going from ``old`` to ``new`` is a large enough bump."""
    return actual_bump(parse_version(old), parse_version(new)) >= required
