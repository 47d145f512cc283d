"""Constant product quote engine and live pools."""

from dataclasses import dataclass, field
from typing import Optional

from quantum_arbitrage.config import FEE_DENOMINATOR, U64_MAX
from quantum_arbitrage.core.exceptions import (
    InvalidPoolError,
    PoolExhausted,
    SlippageExceeded,
)
from quantum_arbitrage.core.math import (
    Rounding,
    checked_add,
    fits_u64,
    mul_div,
    saturating_add,
    saturating_mul_div,
)
from quantum_arbitrage.core.trade import PoolSnapshot

# Sentinel input amount for an output the pool cannot provide.
UNREACHABLE = U64_MAX


def _check_pool(reserve_in: int, reserve_out: int, fee_bps: int) -> None:
    if reserve_in <= 0 or reserve_out <= 0:
        raise InvalidPoolError(
            f"reserves must be positive, got ({reserve_in}, {reserve_out})"
        )
    if not 0 <= fee_bps < FEE_DENOMINATOR:
        raise InvalidPoolError(f"fee_bps must be in [0, {FEE_DENOMINATOR}), got {fee_bps}")


def quote_out(reserve_in: int, reserve_out: int, amount_in: int, fee_bps: int) -> int:
    """Output received for ``amount_in``, fee charged on the input.

    Uses the fee-on-input model: only ``amount_in * (1 - f)`` enters the
    curve ``(x + net_in)(y - out) = x * y``. Both divisions floor, and the
    result saturates at U64_MAX.

    Args:
        reserve_in: Reserve of the token being paid in
        reserve_out: Reserve of the token being paid out
        amount_in: Gross input amount
        fee_bps: Fee in basis points

    Returns:
        Amount out, always strictly below ``reserve_out``; 0 when the
        post-trade input reserve would exceed U64_MAX
    """
    _check_pool(reserve_in, reserve_out, fee_bps)
    if amount_in < 0:
        raise ValueError(f"amount_in must be >= 0, got {amount_in}")
    if amount_in == 0:
        return 0

    net_in = mul_div(amount_in, FEE_DENOMINATOR - fee_bps, FEE_DENOMINATOR, Rounding.DOWN)
    if net_in == 0:
        return 0
    # The post-trade reserve must stay representable
    if not fits_u64(reserve_in, net_in):
        return 0
    return saturating_mul_div(reserve_out, net_in, reserve_in + net_in, Rounding.DOWN)


def quote_in(reserve_in: int, reserve_out: int, amount_out: int, fee_bps: int) -> int:
    """Gross input required to receive exactly ``amount_out``.

    Inverse of ``quote_out``; both divisions ceil so that
    ``quote_out(quote_in(x)) >= x``. Returns ``UNREACHABLE`` when the
    output would drain the pool, or when the input or the post-trade
    reserve exceeds U64_MAX.
    """
    _check_pool(reserve_in, reserve_out, fee_bps)
    if amount_out < 0:
        raise ValueError(f"amount_out must be >= 0, got {amount_out}")
    if amount_out == 0:
        return 0
    if amount_out >= reserve_out:
        return UNREACHABLE

    net_in = mul_div(reserve_in, amount_out, reserve_out - amount_out, Rounding.UP)
    if not fits_u64(reserve_in, net_in):
        return UNREACHABLE
    return saturating_mul_div(net_in, FEE_DENOMINATOR, FEE_DENOMINATOR - fee_bps, Rounding.UP)


@dataclass
class Pool:
    """Live constant product pool over an asset/stable pair.

    Fees are collected into separate buckets rather than being reinvested
    into liquidity, so the curve only ever sees the net input:
    - Swap uses fee-adjusted input: (x + net_in)(y - out) = k
    - Fee portion goes to accumulated_fees_*, NOT reserves
    """
    asset_reserve: int
    stable_reserve: int
    fee_bps: int
    name: str = ""
    accumulated_fees_asset: int = field(default=0, init=False)
    accumulated_fees_stable: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        # Validates reserves and fee
        self.snapshot()

    @property
    def outcome(self) -> Optional[int]:
        return None

    def snapshot(self) -> PoolSnapshot:
        return PoolSnapshot(
            asset_reserve=self.asset_reserve,
            stable_reserve=self.stable_reserve,
            fee_bps=self.fee_bps,
            outcome=self.outcome,
        )

    def _fee_of(self, amount_in: int) -> int:
        net_in = mul_div(amount_in, FEE_DENOMINATOR - self.fee_bps, FEE_DENOMINATOR)
        return amount_in - net_in

    def quote_asset_for_stable(self, asset_in: int) -> int:
        """Stable received for selling ``asset_in``."""
        return quote_out(self.asset_reserve, self.stable_reserve, asset_in, self.fee_bps)

    def quote_stable_for_asset(self, stable_in: int) -> int:
        """Asset received for paying ``stable_in``."""
        return quote_out(self.stable_reserve, self.asset_reserve, stable_in, self.fee_bps)

    def quote_asset_cost(self, asset_out: int) -> int:
        """Stable required to buy exactly ``asset_out``."""
        return quote_in(self.stable_reserve, self.asset_reserve, asset_out, self.fee_bps)

    def swap_asset_for_stable(self, asset_in: int, min_stable_out: int = 0) -> int:
        """Sell asset into the pool. Returns stable paid out."""
        stable_out = self.quote_asset_for_stable(asset_in)
        if stable_out < min_stable_out:
            raise SlippageExceeded(
                f"{self.name}: stable out {stable_out} below minimum {min_stable_out}"
            )
        fee = self._fee_of(asset_in)
        self.asset_reserve = checked_add(self.asset_reserve, asset_in - fee)
        self.stable_reserve -= stable_out
        self.accumulated_fees_asset = saturating_add(self.accumulated_fees_asset, fee)
        return stable_out

    def swap_stable_for_asset(self, stable_in: int, min_asset_out: int = 0) -> int:
        """Pay stable into the pool. Returns asset paid out."""
        asset_out = self.quote_stable_for_asset(stable_in)
        if asset_out < min_asset_out:
            raise SlippageExceeded(
                f"{self.name}: asset out {asset_out} below minimum {min_asset_out}"
            )
        fee = self._fee_of(stable_in)
        self.stable_reserve = checked_add(self.stable_reserve, stable_in - fee)
        self.asset_reserve -= asset_out
        self.accumulated_fees_stable = saturating_add(self.accumulated_fees_stable, fee)
        return asset_out

    def buy_asset_exact(self, asset_out: int, max_stable_in: Optional[int] = None) -> int:
        """Buy exactly ``asset_out``. Returns the stable charged.

        The pool keeps any rounding surplus between the ceiled input and
        the exact curve requirement.
        """
        if asset_out >= self.asset_reserve:
            raise PoolExhausted(asset_out, self.asset_reserve)
        stable_in = self.quote_asset_cost(asset_out)
        if stable_in == UNREACHABLE:
            raise PoolExhausted(asset_out, self.asset_reserve)
        if max_stable_in is not None and stable_in > max_stable_in:
            raise SlippageExceeded(
                f"{self.name}: stable in {stable_in} above maximum {max_stable_in}"
            )
        fee = self._fee_of(stable_in)
        self.stable_reserve = checked_add(self.stable_reserve, stable_in - fee)
        self.asset_reserve -= asset_out
        self.accumulated_fees_stable = saturating_add(self.accumulated_fees_stable, fee)
        return stable_in


@dataclass
class SpotPool(Pool):
    """The standard spot market."""

    def __post_init__(self) -> None:
        if not self.name:
            self.name = "spot"
        super().__post_init__()


@dataclass
class ConditionalPool(Pool):
    """Outcome-specific market trading that outcome's conditional tokens."""
    outcome_index: int = 0

    def __post_init__(self) -> None:
        if not self.name:
            self.name = f"conditional-{self.outcome_index}"
        super().__post_init__()

    @property
    def outcome(self) -> Optional[int]:
        return self.outcome_index
