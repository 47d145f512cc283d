"""Quantum arbitrage between a spot market and its conditional markets."""

from quantum_arbitrage.core.trade import (
    ArbitrageDirection,
    OptimizationResult,
    PoolSnapshot,
    SearchHint,
)
from quantum_arbitrage.core.market import Market
from quantum_arbitrage.market.arbitrageur import Arbitrageur, find_optimal_arbitrage
from quantum_arbitrage.settlement.complete_set import CompleteSetExecutor, Recipient

__all__ = [
    "ArbitrageDirection",
    "OptimizationResult",
    "PoolSnapshot",
    "SearchHint",
    "Market",
    "Arbitrageur",
    "find_optimal_arbitrage",
    "CompleteSetExecutor",
    "Recipient",
]
