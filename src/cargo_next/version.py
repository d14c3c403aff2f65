from enum import Enum

from semver import Version

from cargo_next.errors import VersionParseError
from cargo_next.logging import get_logger

log = get_logger("cargo_next.version")


class Increment(str, Enum):
    """Which component of a version to advance."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


def parse_version(text: str) -> Version:
    """Parse ``text`` using the strict SemVer 2.0.0 grammar.

    Leading zeros and missing components are rejected.
    """
    if not isinstance(text, str):
        raise VersionParseError(text, "expected a string")
    try:
        return Version.parse(text)
    except ValueError as e:
        raise VersionParseError(text, str(e)) from e


def increment(version: Version, kind: Increment) -> Version:
    """Return the next version for ``kind``; ``version`` is left untouched.

    Lower components reset to zero and any prerelease or build suffix is
    dropped, since the result is always a new release point.
    """
    kind = Increment(kind)
    if kind is Increment.MAJOR:
        return Version(version.major + 1, 0, 0)
    if kind is Increment.MINOR:
        return Version(version.major, version.minor + 1, 0)
    return Version(version.major, version.minor, version.patch + 1)


def render(version: Version) -> str:
    return str(version)


def bump_version(text: str, kind: Increment) -> Version:
    """Parse ``text`` and apply one increment."""
    current = parse_version(text)
    bumped = increment(current, kind)
    log.info("Bumped %s (%s) -> %s", current, Increment(kind).value, bumped)
    return bumped
