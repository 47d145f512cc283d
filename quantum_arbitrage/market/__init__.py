"""Arbitrage pricing and sizing components."""

from quantum_arbitrage.market.aggregator import aggregate_cost, bottleneck, quote_each
from quantum_arbitrage.market.simulator import (
    simulate,
    simulate_conditional_to_spot,
    simulate_spot_to_conditional,
)
from quantum_arbitrage.market.search import SearchOutcome, TernarySearch
from quantum_arbitrage.market.arbitrageur import Arbitrageur, find_optimal_arbitrage

__all__ = [
    "aggregate_cost",
    "bottleneck",
    "quote_each",
    "simulate",
    "simulate_conditional_to_spot",
    "simulate_spot_to_conditional",
    "SearchOutcome",
    "TernarySearch",
    "Arbitrageur",
    "find_optimal_arbitrage",
]
