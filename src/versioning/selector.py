"""Selection of the newest stable release in each minor line."""

import logging
from typing import Iterable, List, Optional

from common.logging_utils import extra_context, is_debug_enabled
from .catalog import sort_descending
from .models import MinorLine, SemanticVersion, is_prerelease, minor_line

logger = logging.getLogger(__name__)


def eligible(releases: Iterable[SemanticVersion], min_version: SemanticVersion) -> List[SemanticVersion]:
    """Return the stable releases at or above ``min_version`` as a new list."""
    return [r for r in releases if not is_prerelease(r) and not r < min_version]


def select(releases: Iterable[SemanticVersion], min_version: SemanticVersion) -> List[SemanticVersion]:
    """Pick the newest stable release of every minor line at or above ``min_version``.

    Pre-releases are never candidates and the threshold is inclusive. The
    result is ordered from highest to lowest precedence and holds at most one
    version per (major, minor) pair. ``releases`` is not modified.

    Args:
        releases: Parsed release versions, in any order.
        min_version: Inclusive lower bound.

    Returns:
        List of selected versions, possibly empty.
    """
    candidates = sort_descending(eligible(releases, min_version))

    selected: List[SemanticVersion] = []
    current: Optional[MinorLine] = None
    for release in candidates:
        line = minor_line(release)
        if current is None or line != current:
            selected.append(release)
            current = line

    if is_debug_enabled(logger):
        logger.debug(
            "Selected latest per minor line",
            extra=extra_context(
                event="decision",
                component="selector",
                action="select",
                candidate_count=len(candidates),
                count=len(selected),
                min_version=str(min_version),
            )
        )
    return selected
