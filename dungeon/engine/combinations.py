"""Index subset enumeration for the row-deficit phase."""

from __future__ import annotations

from itertools import combinations
from typing import List, Tuple


def index_combinations(m: int, n: int) -> List[Tuple[int, ...]]:
    """Every increasing ``m``-subset of ``range(n)``.

    Order is include-first depth-first (lexicographic), which fixes the
    order in which the search tries wall sets. Empty when ``m > n``.
    """

    if m > n:
        return []
    return list(combinations(range(n), m))
