"""Trade data classes."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

from quantum_arbitrage.config import FEE_DENOMINATOR, U64_MAX
from quantum_arbitrage.core.exceptions import InvalidPoolError


class TradeSide(Enum):
    """Side of the conditional leg from the trader's perspective."""
    BUY = "buy"    # Trader buys asset from every conditional pool (MAX cost)
    SELL = "sell"  # Trader sells asset into every conditional pool (MIN proceeds)


class ArbitrageDirection(Enum):
    """Which market the arbitrage buys asset from."""
    SPOT_TO_CONDITIONAL = "spot_to_conditional"  # Buy on spot, sell into conditionals
    CONDITIONAL_TO_SPOT = "conditional_to_spot"  # Buy from conditionals, sell on spot

    @property
    def conditional_side(self) -> TradeSide:
        if self is ArbitrageDirection.SPOT_TO_CONDITIONAL:
            return TradeSide.SELL
        return TradeSide.BUY


@dataclass(frozen=True)
class PoolSnapshot:
    """Immutable view of a constant product pool.

    Reserves are u64 token amounts; ``fee_bps`` is charged on the input
    leg. ``outcome`` is set for conditional pools only.
    """
    asset_reserve: int
    stable_reserve: int
    fee_bps: int
    outcome: Optional[int] = None

    def __post_init__(self) -> None:
        for name in ("asset_reserve", "stable_reserve"):
            value = getattr(self, name)
            if not 0 < value <= U64_MAX:
                raise InvalidPoolError(f"{name} must be in (0, U64_MAX], got {value}")
        if not 0 <= self.fee_bps < FEE_DENOMINATOR:
            raise InvalidPoolError(
                f"fee_bps must be in [0, {FEE_DENOMINATOR}), got {self.fee_bps}"
            )
        if self.outcome is not None and self.outcome < 0:
            raise InvalidPoolError(f"outcome must be >= 0, got {self.outcome}")

    @property
    def spot_price(self) -> Decimal:
        """Current price (stable per asset) before fees."""
        return Decimal(self.stable_reserve) / Decimal(self.asset_reserve)


@dataclass(frozen=True)
class SearchHint:
    """Optional caller window narrowing the size search.

    An ``upper`` of 0 means no upper hint.
    """
    lower: int = 0
    upper: int = 0

    def __post_init__(self) -> None:
        if not (0 <= self.lower <= U64_MAX and 0 <= self.upper <= U64_MAX):
            raise ValueError(f"hint bounds must be u64, got ({self.lower}, {self.upper})")


@dataclass(frozen=True)
class CandidateTrade:
    size: int
    direction: ArbitrageDirection


@dataclass(frozen=True)
class OptimizationResult:
    """Outcome of the bidirectional search.

    ``profit == 0`` means no arbitrage was found, in which case
    ``amount`` is also 0.
    """
    amount: int
    profit: int
    direction: ArbitrageDirection
    evaluations: int = 0

    def __post_init__(self) -> None:
        if self.profit < 0:
            raise ValueError(f"profit must be >= 0, got {self.profit}")
        if self.profit > 0 and self.amount <= 0:
            raise ValueError("amount must be > 0 when profit > 0")

    @property
    def is_profitable(self) -> bool:
        return self.profit > 0

    @classmethod
    def none(cls, evaluations: int = 0) -> "OptimizationResult":
        """Result signalling that no arbitrage exists."""
        return cls(
            amount=0,
            profit=0,
            direction=ArbitrageDirection.SPOT_TO_CONDITIONAL,
            evaluations=evaluations,
        )
