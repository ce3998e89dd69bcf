"""Boundary parsing for version strings and repos-file lines.

``parse_version`` raises; the ``parse_*`` helpers used while reading external
input return a ``ParseOutcome`` so callers can skip bad items and keep going.
"""

import re

import semantic_version

from .models import ParseOutcome, RepoSpec, SemanticVersion

# GitHub owner and repository names: letters, digits, '-', '_' and '.'.
_PATH_PART = re.compile(r"^[A-Za-z0-9_.-]+$")


class ParseError(ValueError):
    """Raised when a version string or descriptor line is malformed."""


def parse_version(text: str) -> SemanticVersion:
    """Parse ``MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]`` into a version.

    Build metadata is accepted and dropped. A leading ``v`` is rejected;
    callers holding raw tags use ``parse_tag``.

    Raises:
        ParseError: if ``text`` is not a full semantic version.
    """
    if not isinstance(text, str) or not text.strip():
        raise ParseError("empty version string")
    candidate = text.strip()
    try:
        parsed = semantic_version.Version(candidate)
    except ValueError as exc:
        raise ParseError(f"invalid semantic version {candidate!r}: {exc}") from exc
    return semantic_version.Version(
        major=parsed.major,
        minor=parsed.minor,
        patch=parsed.patch,
        prerelease=parsed.prerelease,
    )


def strip_v_prefix(tag: str) -> str:
    """Remove a single leading 'v' or 'V' from a tag name."""
    tag = tag.strip()
    if tag[:1] in ("v", "V"):
        return tag[1:]
    return tag


def parse_tag(tag: str) -> ParseOutcome:
    """Parse a release tag such as ``v1.9.3`` without raising."""
    if not isinstance(tag, str):
        return ParseOutcome.failure(f"tag is not a string: {tag!r}")
    try:
        return ParseOutcome.success(parse_version(strip_v_prefix(tag)))
    except ParseError as exc:
        return ParseOutcome.failure(str(exc))


def parse_repo_line(line: str) -> ParseOutcome:
    """Parse an ``owner/name,minVersion`` descriptor into a RepoSpec outcome."""
    fields = [f.strip() for f in line.strip().split(",")]
    if len(fields) != 2:
        return ParseOutcome.failure(
            f"expected 'owner/name,minVersion', got {line.strip()!r}"
        )
    path, raw_version = fields

    parts = [p.strip() for p in path.split("/")]
    if len(parts) != 2 or not all(parts):
        return ParseOutcome.failure(f"invalid repository path {path!r}")
    owner, name = parts
    if not (_PATH_PART.match(owner) and _PATH_PART.match(name)):
        return ParseOutcome.failure(f"invalid repository path {path!r}")

    if not raw_version:
        return ParseOutcome.failure(f"missing minimum version for {path}")
    version = parse_tag(raw_version)
    if not version.ok:
        return ParseOutcome.failure(f"{path}: {version.error}")

    return ParseOutcome.success(RepoSpec(owner=owner, name=name, min_version=version.value))
