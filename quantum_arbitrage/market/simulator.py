"""Directional profit simulators.

Both directions trade ``size`` units of asset and measure profit in
stable:

- Spot to conditional: buy ``size`` asset on spot, quantum-split it and
  sell it into every conditional pool; proceeds are the weakest pool's.
- Conditional to spot: quantum-split enough stable to buy ``size`` asset
  from every conditional pool (cost is the most expensive pool's),
  recombine the complete set and sell it on spot.

The simulators are pure and total: any size, including out-of-range ones,
yields a number rather than an exception.
"""

from functools import partial
from typing import Callable, Sequence

from quantum_arbitrage.core.amm import UNREACHABLE, quote_in, quote_out
from quantum_arbitrage.core.math import is_u64, saturate, saturating_sub
from quantum_arbitrage.core.trade import ArbitrageDirection, PoolSnapshot, TradeSide
from quantum_arbitrage.market.aggregator import aggregate_cost

ProfitCurve = Callable[[int], int]

# Signed value reported for sizes that cannot be executed at all.
INFEASIBLE = -UNREACHABLE


def spot_to_conditional_edge(
    spot: PoolSnapshot, conditionals: Sequence[PoolSnapshot], size: int
) -> int:
    """Signed profit of buying on spot and selling into the conditionals."""
    if size == 0:
        return 0
    if not is_u64(size) or size >= spot.asset_reserve:
        return INFEASIBLE

    cost = quote_in(spot.stable_reserve, spot.asset_reserve, size, spot.fee_bps)
    if cost == UNREACHABLE:
        return INFEASIBLE
    proceeds = aggregate_cost(conditionals, size, TradeSide.SELL)
    return proceeds - cost


def conditional_to_spot_edge(
    spot: PoolSnapshot, conditionals: Sequence[PoolSnapshot], size: int
) -> int:
    """Signed profit of buying from the conditionals and selling on spot."""
    if size == 0:
        return 0
    if not is_u64(size):
        return INFEASIBLE

    cost = aggregate_cost(conditionals, size, TradeSide.BUY)
    if cost == UNREACHABLE:
        return INFEASIBLE
    proceeds = quote_out(spot.asset_reserve, spot.stable_reserve, size, spot.fee_bps)
    return proceeds - cost


def simulate_spot_to_conditional(
    spot: PoolSnapshot, conditionals: Sequence[PoolSnapshot], size: int
) -> int:
    """Profit (>= 0) of the spot to conditional arbitrage at ``size``."""
    return max(0, spot_to_conditional_edge(spot, conditionals, size))


def simulate_conditional_to_spot(
    spot: PoolSnapshot, conditionals: Sequence[PoolSnapshot], size: int
) -> int:
    """Profit (>= 0) of the conditional to spot arbitrage at ``size``."""
    return max(0, conditional_to_spot_edge(spot, conditionals, size))


_EDGES = {
    ArbitrageDirection.SPOT_TO_CONDITIONAL: spot_to_conditional_edge,
    ArbitrageDirection.CONDITIONAL_TO_SPOT: conditional_to_spot_edge,
}


def simulate(
    direction: ArbitrageDirection,
    spot: PoolSnapshot,
    conditionals: Sequence[PoolSnapshot],
    size: int,
) -> int:
    return max(0, _EDGES[direction](spot, conditionals, size))


def profit_curve(
    spot: PoolSnapshot, conditionals: Sequence[PoolSnapshot], direction: ArbitrageDirection
) -> ProfitCurve:
    """Signed profit as a function of size, for the optimizer to maximize.

    The curve is left unclamped so that the search can still tell losing
    sizes apart instead of facing a flat zero plateau.
    """
    return partial(_EDGES[direction], spot, conditionals)


def search_upper_bound(
    spot: PoolSnapshot, conditionals: Sequence[PoolSnapshot], direction: ArbitrageDirection
) -> int:
    """Largest size worth searching: one below the reserve being bought from."""
    if direction is ArbitrageDirection.SPOT_TO_CONDITIONAL:
        limit = spot.asset_reserve
    else:
        limit = min(pool.asset_reserve for pool in conditionals)
    return saturate(saturating_sub(limit, 1))
