"""Stock-health status of an article.

The status is never stored as an independent fact: it is a projection of
``(amount, full_amount)`` recomputed on every mutation.
"""

from __future__ import annotations

from enum import Enum

# Capacity used for the ratio when an article has no capacity (0).
FALLBACK_CAPACITY = 250

GOOD_THRESHOLD = 0.70
MEDIUM_THRESHOLD = 0.40


class ArticleStatus(Enum):
    """Status bands, declared from best stocked to most depleted."""

    FULL = "Full"
    GOOD = "Good"
    MEDIUM = "Medium"
    CRITICAL = "Critical"
    EMPTY = "Empty"

    @property
    def rank(self) -> int:
        """Ordinal in declaration order (FULL=0 ... EMPTY=4)."""
        return _RANKS[self]


_RANKS = {status: index for index, status in enumerate(ArticleStatus)}


def classify_status(amount: int, full_amount: int) -> ArticleStatus:
    """Classify stock health from the current amount and the capacity.

    Each band is inclusive on its lower bound:
    ``>= capacity`` Full, ``<= 0`` Empty, ``>= 70%`` Good,
    ``>= 40%`` Medium, anything else Critical.
    """
    safe_max = full_amount if full_amount > 0 else FALLBACK_CAPACITY

    if amount >= safe_max:
        return ArticleStatus.FULL
    if amount <= 0:
        return ArticleStatus.EMPTY

    ratio = amount / safe_max
    if ratio >= GOOD_THRESHOLD:
        return ArticleStatus.GOOD
    if ratio >= MEDIUM_THRESHOLD:
        return ArticleStatus.MEDIUM
    return ArticleStatus.CRITICAL
