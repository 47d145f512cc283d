"""Bidirectional arbitrage search between a spot pool and its conditional pools."""

import logging
from typing import Optional, Sequence

from quantum_arbitrage.config import DEFAULT_SEARCH_SETTINGS, U128_MAX, SearchSettings
from quantum_arbitrage.core.market import validate_conditionals
from quantum_arbitrage.core.math import saturate
from quantum_arbitrage.core.trade import (
    ArbitrageDirection,
    CandidateTrade,
    OptimizationResult,
    PoolSnapshot,
    SearchHint,
)
from quantum_arbitrage.market.aggregator import bottleneck
from quantum_arbitrage.market.search import SearchOutcome, TernarySearch
from quantum_arbitrage.market.simulator import profit_curve, search_upper_bound, simulate

logger = logging.getLogger(__name__)

# Evaluated in this order; on equal profit the earlier direction wins.
DIRECTIONS = (
    ArbitrageDirection.SPOT_TO_CONDITIONAL,
    ArbitrageDirection.CONDITIONAL_TO_SPOT,
)


class Arbitrageur:
    """Finds the optimal arbitrage between a spot pool and N conditional pools.

    Runs one bounded ternary search per direction over the signed profit
    curve and keeps the better one. Operates on immutable snapshots only,
    so it is safe to call concurrently and off the execution path.
    """

    def __init__(self, settings: SearchSettings = DEFAULT_SEARCH_SETTINGS):
        self.search = TernarySearch(settings)

    def search_direction(
        self,
        spot: PoolSnapshot,
        conditionals: Sequence[PoolSnapshot],
        direction: ArbitrageDirection,
        hint: Optional[SearchHint] = None,
    ) -> SearchOutcome:
        """Run the ternary search for a single direction."""
        curve = profit_curve(spot, conditionals, direction)
        upper_bound = search_upper_bound(spot, conditionals, direction)
        return self.search.maximize(curve, upper_bound, hint)

    def find_arbitrage(
        self,
        spot: PoolSnapshot,
        conditionals: Sequence[PoolSnapshot],
        hint: Optional[SearchHint] = None,
    ) -> OptimizationResult:
        """Find the most profitable trade in either direction.

        Args:
            spot: Spot pool snapshot
            conditionals: Conditional pool snapshots, one per outcome
            hint: Optional search window applied to both directions

        Returns:
            OptimizationResult; ``profit == 0`` when no arbitrage exists

        Raises:
            InvalidMarketError: If the number of conditional pools is out of range
        """
        validate_conditionals(conditionals)

        best: Optional[CandidateTrade] = None
        best_profit = 0
        evaluations = 0
        for direction in DIRECTIONS:
            outcome = self.search_direction(spot, conditionals, direction, hint)
            evaluations += outcome.evaluations
            if outcome.value > best_profit:
                best = CandidateTrade(size=outcome.size, direction=direction)
                best_profit = outcome.value

        if best is None:
            logger.debug("No arbitrage across %d outcomes", len(conditionals))
            return OptimizationResult.none(evaluations)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Arbitrage %s: amount=%d profit=%d evaluations=%d bottleneck=outcome %d",
                best.direction.value, best.size, best_profit, evaluations,
                bottleneck(conditionals, best.size, best.direction.conditional_side),
            )
        return OptimizationResult(
            amount=best.size,
            profit=saturate(best_profit, U128_MAX),
            direction=best.direction,
            evaluations=evaluations,
        )

    def evaluate(
        self,
        spot: PoolSnapshot,
        conditionals: Sequence[PoolSnapshot],
        amount: int,
        direction: ArbitrageDirection,
    ) -> int:
        """Profit (>= 0) of a given candidate, for cross-checking results."""
        return simulate(direction, spot, conditionals, amount)


def find_optimal_arbitrage(
    spot: PoolSnapshot,
    conditionals: Sequence[PoolSnapshot],
    hint: Optional[SearchHint] = None,
    settings: SearchSettings = DEFAULT_SEARCH_SETTINGS,
) -> OptimizationResult:
    """Convenience wrapper around ``Arbitrageur.find_arbitrage``."""
    return Arbitrageur(settings).find_arbitrage(spot, conditionals, hint)
