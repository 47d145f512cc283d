"""Quantum cost aggregation across conditional pools.

One quantum-split deposit mints the same amount of conditional tokens for
every outcome at once, so acting on all N pools costs only as much as the
most expensive pool (MAX when buying) and yields only as much as the
weakest pool (MIN when selling). Summing per-pool quotes would misprice
an opportunity by a factor approaching N.
"""

from typing import Sequence

from quantum_arbitrage.core.amm import quote_in, quote_out
from quantum_arbitrage.core.trade import PoolSnapshot, TradeSide


def _quote(pool: PoolSnapshot, amount: int, side: TradeSide) -> int:
    if side is TradeSide.BUY:
        # Stable in for exactly `amount` conditional asset out
        return quote_in(pool.stable_reserve, pool.asset_reserve, amount, pool.fee_bps)
    # Stable out for `amount` conditional asset in
    return quote_out(pool.asset_reserve, pool.stable_reserve, amount, pool.fee_bps)


def quote_each(pools: Sequence[PoolSnapshot], amount: int, side: TradeSide) -> list[int]:
    """Per-pool stable cost (BUY) or proceeds (SELL) for ``amount`` asset."""
    if not pools:
        raise ValueError("pools cannot be empty")
    return [_quote(pool, amount, side) for pool in pools]


def aggregate_cost(pools: Sequence[PoolSnapshot], amount: int, side: TradeSide) -> int:
    """Aggregate stable cost or proceeds of trading ``amount`` on every pool.

    Args:
        pools: Conditional pool snapshots, one per outcome
        amount: Conditional asset amount traded on each pool
        side: BUY for the cost of acquiring ``amount`` from every pool,
            SELL for the proceeds of selling ``amount`` into every pool

    Returns:
        ``max`` of per-pool costs for BUY (``UNREACHABLE`` if any pool
        cannot deliver), ``min`` of per-pool proceeds for SELL
    """
    quotes = quote_each(pools, amount, side)
    if side is TradeSide.BUY:
        return max(quotes)
    return min(quotes)


def bottleneck(pools: Sequence[PoolSnapshot], amount: int, side: TradeSide) -> int:
    """Index of the pool that constrains the aggregate (lowest index on ties)."""
    quotes = quote_each(pools, amount, side)
    target = max(quotes) if side is TradeSide.BUY else min(quotes)
    return quotes.index(target)
