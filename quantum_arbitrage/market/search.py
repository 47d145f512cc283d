"""Bounded two-phase ternary search over integer trade sizes.

The profit curve of a constant product arbitrage is concave in size, so a
ternary search converges on its maximum. Two phases:

1. Coarse: split ``[left, right]`` into thirds and drop the inferior
   outer third until the width is at most ``coarse_threshold``.
2. Scan: evaluate each of the at most ``coarse_threshold + 1`` sizes
   left, directly after the coarse loop with no intermediate stepping.
   The scan absorbs plateaus and the non-strict concavity integer
   rounding creates near the optimum.

Each coarse iteration shrinks the width ``w`` to ``w - w // 3``. That is
progress only while ``w // 3 >= 1``, i.e. ``w >= 3``, which is why the
threshold must be at least 3: at width 2 the loop would spin forever.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from quantum_arbitrage.config import (
    DEFAULT_SEARCH_SETTINGS,
    MIN_COARSE_THRESHOLD,
    SearchSettings,
)
from quantum_arbitrage.core.exceptions import SearchNonTermination
from quantum_arbitrage.core.trade import SearchHint
from quantum_arbitrage.market.simulator import ProfitCurve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchOutcome:
    """Best size found and what it cost to find it."""
    size: int
    value: int
    evaluations: int
    iterations: int


def iteration_ceiling(width: int, threshold: int) -> int:
    """Exact number of coarse iterations needed to narrow ``width``.

    The schedule is deterministic in the width alone, so this is also the
    bound the search enforces. It grows as log base 1.5 of
    ``width / threshold``.

    Raises:
        ValueError: If ``threshold`` is below the minimum of 3
    """
    if threshold < MIN_COARSE_THRESHOLD:
        raise ValueError(f"threshold must be >= {MIN_COARSE_THRESHOLD}, got {threshold}")
    iterations = 0
    while width > threshold:
        width -= width // 3
        iterations += 1
    return iterations


def evaluation_budget(width: int, threshold: int) -> int:
    """Most curve evaluations one search over ``width`` can spend."""
    return 2 * iteration_ceiling(width, threshold) + min(width, threshold) + 1


def search_window(upper_bound: int, hint: Optional[SearchHint] = None) -> tuple[int, int]:
    """Narrow ``[0, upper_bound]`` by a caller hint.

    A hint that leaves no valid size is ignored.
    """
    if hint is None:
        return 0, upper_bound
    lower = hint.lower
    upper = upper_bound if hint.upper == 0 else min(hint.upper, upper_bound)
    if lower > upper:
        logger.debug("Ignoring search hint %s outside [0, %d]", hint, upper_bound)
        return 0, upper_bound
    return lower, upper


class TernarySearch:
    """Maximizes an integer profit curve over ``[0, upper_bound]``."""

    def __init__(self, settings: SearchSettings = DEFAULT_SEARCH_SETTINGS):
        self.settings = settings

    @property
    def coarse_threshold(self) -> int:
        return self.settings.coarse_threshold

    def maximize(
        self,
        curve: ProfitCurve,
        upper_bound: int,
        hint: Optional[SearchHint] = None,
    ) -> SearchOutcome:
        """Find the size with the highest curve value.

        Ties resolve to the smaller size.

        Args:
            curve: Pure function from size to signed profit
            upper_bound: Largest size to consider
            hint: Optional window narrowing the search

        Returns:
            SearchOutcome with the best size, its value and search cost
        """
        if upper_bound < 0:
            raise ValueError(f"upper_bound must be >= 0, got {upper_bound}")

        left, right = search_window(upper_bound, hint)
        values: dict[int, int] = {}

        def evaluate(size: int) -> int:
            if size not in values:
                values[size] = curve(size)
            return values[size]

        iterations = 0
        if right - left <= 1:
            # Degenerate window: only the boundary points exist
            evaluate(left)
            evaluate(right)
        else:
            threshold = self.coarse_threshold
            ceiling = iteration_ceiling(right - left, threshold)
            while right - left > threshold:
                if iterations >= ceiling:
                    raise SearchNonTermination(
                        f"coarse phase exceeded {ceiling} iterations at [{left}, {right}]"
                    )
                third = (right - left) // 3
                mid1 = left + third
                mid2 = right - third
                if evaluate(mid1) < evaluate(mid2):
                    left = mid1
                else:
                    right = mid2
                iterations += 1

            for size in range(left, right + 1):
                evaluate(size)

        size, value = max(values.items(), key=lambda item: (item[1], -item[0]))
        logger.debug(
            "Search finished: size=%d value=%d evaluations=%d iterations=%d",
            size, value, len(values), iterations,
        )
        return SearchOutcome(
            size=size,
            value=value,
            evaluations=len(values),
            iterations=iterations,
        )
