"""Core pool, quoting and escrow components."""

from quantum_arbitrage.core.trade import (
    ArbitrageDirection,
    CandidateTrade,
    OptimizationResult,
    PoolSnapshot,
    SearchHint,
    TradeSide,
)
from quantum_arbitrage.core.amm import (
    UNREACHABLE,
    ConditionalPool,
    Pool,
    SpotPool,
    quote_in,
    quote_out,
)
from quantum_arbitrage.core.escrow import QuantumBalance, TokenEscrow
from quantum_arbitrage.core.market import Market

__all__ = [
    "ArbitrageDirection",
    "CandidateTrade",
    "OptimizationResult",
    "PoolSnapshot",
    "SearchHint",
    "TradeSide",
    "UNREACHABLE",
    "ConditionalPool",
    "Pool",
    "SpotPool",
    "quote_in",
    "quote_out",
    "QuantumBalance",
    "TokenEscrow",
    "Market",
]
