"""Fuzzy keyword ranking for package and dependency names."""

from __future__ import annotations

import difflib
from typing import Iterable, List, Optional, Tuple

EXACT_BONUS = 300
PREFIX_BONUS = 200
SUBSTRING_BONUS = 100


def fuzzy_score(item: str, keyword: str) -> Optional[int]:
    """
    Score ``item`` against ``keyword``.

    The keyword's characters must appear in order in the item, ignoring
    case; otherwise the item does not match and None is returned.
    """
    if not keyword:
        return 0
    haystack = item.lower()
    needle = keyword.lower()
    remaining = iter(haystack)
    if not all(char in remaining for char in needle):
        return None

    score = int(difflib.SequenceMatcher(None, needle, haystack).ratio() * 100)
    if haystack == needle:
        score += EXACT_BONUS
    elif haystack.startswith(needle):
        score += PREFIX_BONUS
    elif needle in haystack:
        score += SUBSTRING_BONUS
    return score


def fuzzy_match(items: Iterable[str], keyword: str) -> List[Tuple[str, int]]:
    """
    Return matching items with their scores, best first.

    Ties keep the input order.

    Examples:
        >>> [name for name, _ in fuzzy_match(["serde_json", "serde", "tokio"], "serde")]
        ['serde', 'serde_json']
    """
    matches = []
    for item in items:
        score = fuzzy_score(item, keyword)
        if score is not None:
            matches.append((item, score))
    matches.sort(key=lambda pair: pair[1], reverse=True)
    return matches


__all__ = ["fuzzy_score", "fuzzy_match"]
