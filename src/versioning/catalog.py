"""Precedence-ordered views over collections of semantic versions."""

from typing import Iterable, List

from .models import SemanticVersion


def sort_descending(versions: Iterable[SemanticVersion]) -> List[SemanticVersion]:
    """Return a new list of ``versions`` from highest to lowest precedence.

    The input is left untouched; equal versions keep their input order.
    """
    return sorted(versions, reverse=True)
