"""Settlement of arbitrage against live pools."""

from quantum_arbitrage.settlement.complete_set import (
    CompleteSetExecutor,
    ExecutionReceipt,
    Recipient,
)

__all__ = [
    "CompleteSetExecutor",
    "ExecutionReceipt",
    "Recipient",
]
