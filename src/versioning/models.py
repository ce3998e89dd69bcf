"""Data models for version parsing and selection."""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

import semantic_version

# Stable releases have an empty prerelease tuple; build metadata is always
# stripped by the parser so equality and hashing stay structural.
SemanticVersion = semantic_version.Version

# (major, minor) pair identifying a minor line.
MinorLine = Tuple[int, int]


@dataclass(frozen=True)
class RepoSpec:
    """Repository descriptor read from the repos file."""
    owner: str
    name: str
    min_version: SemanticVersion

    @property
    def path(self) -> str:
        """Return the ``owner/name`` path used by hosting APIs and output."""
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class ParseOutcome:
    """Result of a boundary parse: exactly one of value or error is set."""
    value: Optional[Any] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> "ParseOutcome":
        return cls(value=value, error=None)

    @classmethod
    def failure(cls, error: str) -> "ParseOutcome":
        return cls(value=None, error=error)


def minor_line(version: SemanticVersion) -> MinorLine:
    """Return the (major, minor) pair of a version."""
    return version.major, version.minor


def is_prerelease(version: SemanticVersion) -> bool:
    """Return True when the version carries prerelease identifiers."""
    return bool(version.prerelease)
