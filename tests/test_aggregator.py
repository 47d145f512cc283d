"""Tests for quantum cost aggregation.

A quantum split acts on every conditional pool with the same amount, so
the aggregate is the MAX per-pool cost when buying and the MIN per-pool
proceeds when selling. It must never be the sum.
"""

import pytest

from quantum_arbitrage.core.amm import UNREACHABLE, quote_in, quote_out
from quantum_arbitrage.core.trade import ArbitrageDirection, TradeSide
from quantum_arbitrage.market.aggregator import aggregate_cost, bottleneck, quote_each
from tests.fixtures.market_fixtures import make_conditionals


@pytest.fixture
def skewed_pools():
    """Three pools with prices 1.0, 2.0 and 1.5, no fee."""
    return make_conditionals([(1000, 1000), (1000, 2000), (1000, 1500)], fee_bps=0)


class TestBuyAggregate:
    """Buying from every pool costs the most expensive pool's quote."""

    def test_per_pool_quotes(self, skewed_pools):
        # ceil(stable * 90 / 910) for each pool
        assert quote_each(skewed_pools, 90, TradeSide.BUY) == [99, 198, 149]

    def test_max_not_sum(self, skewed_pools):
        assert aggregate_cost(skewed_pools, 90, TradeSide.BUY) == 198
        assert bottleneck(skewed_pools, 90, TradeSide.BUY) == 1

    def test_unreachable_pool_dominates(self):
        pools = make_conditionals([(100, 1000), (10_000, 1000)], fee_bps=0)
        assert aggregate_cost(pools, 100, TradeSide.BUY) == UNREACHABLE
        assert bottleneck(pools, 100, TradeSide.BUY) == 0

    def test_zero_amount(self, skewed_pools):
        assert aggregate_cost(skewed_pools, 0, TradeSide.BUY) == 0


class TestSellAggregate:
    """Selling into every pool yields the weakest pool's proceeds."""

    def test_per_pool_quotes(self, skewed_pools):
        # floor(stable * 90 / 1090) for each pool
        assert quote_each(skewed_pools, 90, TradeSide.SELL) == [82, 165, 123]

    def test_min_not_sum(self, skewed_pools):
        assert aggregate_cost(skewed_pools, 90, TradeSide.SELL) == 82
        assert bottleneck(skewed_pools, 90, TradeSide.SELL) == 0


class TestQuantumInvariance:
    """Identical pools aggregate to a single pool's quote for any N."""

    @pytest.mark.parametrize("n_outcomes", [2, 3, 10, 50])
    @pytest.mark.parametrize("side", [TradeSide.BUY, TradeSide.SELL])
    def test_identical_pools(self, n_outcomes, side):
        pools = make_conditionals([(900_000, 1_100_000)] * n_outcomes)
        single = quote_each(pools[:1], 12_345, side)[0]
        assert aggregate_cost(pools, 12_345, side) == single

    def test_buy_matches_direct_quote(self):
        pools = make_conditionals([(900_000, 1_100_000)] * 50)
        assert aggregate_cost(pools, 10_000, TradeSide.BUY) == quote_in(1_100_000, 900_000, 10_000, 30)

    def test_sell_matches_direct_quote(self):
        pools = make_conditionals([(900_000, 1_100_000)] * 50)
        assert aggregate_cost(pools, 10_000, TradeSide.SELL) == quote_out(900_000, 1_100_000, 10_000, 30)

    def test_extra_pool_never_improves(self, skewed_pools):
        worse = make_conditionals([(1000, 1000), (1000, 2000), (1000, 1500), (1000, 3000)], fee_bps=0)
        assert aggregate_cost(worse, 90, TradeSide.BUY) >= aggregate_cost(skewed_pools, 90, TradeSide.BUY)
        cheaper = make_conditionals([(1000, 1000), (1000, 2000), (1000, 1500), (1000, 500)], fee_bps=0)
        assert aggregate_cost(cheaper, 90, TradeSide.SELL) <= aggregate_cost(skewed_pools, 90, TradeSide.SELL)


def test_ties_resolve_to_lowest_index():
    pools = make_conditionals([(1000, 1500), (1000, 1000), (1000, 1500)], fee_bps=0)
    assert bottleneck(pools, 90, TradeSide.BUY) == 0


def test_empty_pools_rejected():
    with pytest.raises(ValueError):
        aggregate_cost([], 1, TradeSide.BUY)


def test_direction_maps_to_conditional_side():
    assert ArbitrageDirection.SPOT_TO_CONDITIONAL.conditional_side is TradeSide.SELL
    assert ArbitrageDirection.CONDITIONAL_TO_SPOT.conditional_side is TradeSide.BUY
