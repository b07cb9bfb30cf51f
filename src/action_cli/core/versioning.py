"""Dotted version parsing and comparison.

Parsing is lenient: a segment that is not a plain non-negative integer
becomes ``None`` (unparsable) instead of raising.  An unparsable segment
never compares as greater, so a malformed newer release degrades to
"no update available".
"""

from __future__ import annotations

from action_cli.core.models import UpdateAdvisory

VersionTuple = tuple[int | None, ...]

DEFAULT_VERSION: str = "0.0.0"


def _parse_segment(segment: str) -> int | None:
    text = segment.strip()
    if not text:
        return 0
    if text.isascii() and text.isdigit():
        return int(text)
    return None


def parse_version(version: str | None, length: int = 3) -> VersionTuple:
    """Split *version* on ``.`` into exactly *length* components.

    Missing components are padded with ``0``; extra ones are dropped.

    >>> parse_version("1.2")
    (1, 2, 0)
    >>> parse_version("1.x.3")
    (1, None, 3)
    """
    parts = [_parse_segment(seg) for seg in (version or DEFAULT_VERSION).split(".")]
    parts.extend([0] * length)
    return tuple(parts[:length])


def greater_than(a: str | None, b: str | None, length: int = 3) -> bool:
    """Return ``True`` iff version *a* is strictly newer than *b*.

    Components are compared numerically, most significant first.  Equal
    versions are not greater.
    """
    left = parse_version(a, length)
    right = parse_version(b, length)
    for x, y in zip(left, right):
        if x is None or y is None:
            return False
        if x != y:
            return x > y
    return False


def evaluate_staleness(
    package: str,
    current_version: str,
    latest_version: str | None,
    *,
    update_command: str | None = None,
) -> UpdateAdvisory | None:
    """Decide whether *latest_version* warrants an update advisory.

    Returns ``None`` when the latest version is unknown or not newer
    than *current_version*.
    """
    if not latest_version:
        return None
    if not greater_than(latest_version, current_version):
        return None
    return UpdateAdvisory(
        package=package,
        current_version=current_version,
        latest_version=latest_version,
        update_command=update_command or f"pip install --upgrade {package}",
    )
