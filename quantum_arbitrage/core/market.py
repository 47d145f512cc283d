"""A spot pool plus its outcome-specific conditional pools."""

import copy
import threading
from dataclasses import dataclass, field, fields
from typing import Optional, Sequence

from quantum_arbitrage.config import DEFAULT_FEE_BPS, MAX_CONDITIONALS, MIN_CONDITIONALS
from quantum_arbitrage.core.amm import ConditionalPool, SpotPool
from quantum_arbitrage.core.escrow import TokenEscrow
from quantum_arbitrage.core.exceptions import InvalidMarketError
from quantum_arbitrage.core.trade import PoolSnapshot


def validate_conditionals(conditionals: Sequence) -> None:
    """Check the conditional pool count against protocol ceilings."""
    n = len(conditionals)
    if not MIN_CONDITIONALS <= n <= MAX_CONDITIONALS:
        raise InvalidMarketError(
            f"market needs {MIN_CONDITIONALS}..{MAX_CONDITIONALS} conditional pools, got {n}"
        )


@dataclass
class MarketState:
    """Detached copy of a market's mutable state."""
    spot: SpotPool
    conditionals: list[ConditionalPool]
    escrow: TokenEscrow


@dataclass
class Market:
    """One spot pool and N conditional pools over the same asset/stable pair.

    ``lock`` serializes writers: complete-set accounting holds it for the
    whole read-optimize-write unit, so two executions never interleave on
    the same pool set.
    """
    spot: SpotPool
    conditionals: list[ConditionalPool]
    escrow: Optional[TokenEscrow] = None
    lock: threading.RLock = field(
        default_factory=threading.RLock, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        validate_conditionals(self.conditionals)
        for index, pool in enumerate(self.conditionals):
            if pool.outcome_index != index:
                raise InvalidMarketError(
                    f"conditional pool at position {index} has outcome {pool.outcome_index}"
                )
        if self.escrow is None:
            self.escrow = TokenEscrow.backing_pools(self.conditionals)
        elif self.escrow.n_outcomes != len(self.conditionals):
            raise InvalidMarketError(
                f"escrow covers {self.escrow.n_outcomes} outcomes, market has {len(self.conditionals)}"
            )

    @classmethod
    def from_reserves(
        cls,
        spot: tuple[int, int],
        conditionals: Sequence[tuple[int, int]],
        fee_bps: int = DEFAULT_FEE_BPS,
        spot_fee_bps: Optional[int] = None,
    ) -> "Market":
        """Build a market from ``(asset_reserve, stable_reserve)`` pairs."""
        spot_pool = SpotPool(
            asset_reserve=spot[0],
            stable_reserve=spot[1],
            fee_bps=fee_bps if spot_fee_bps is None else spot_fee_bps,
        )
        pools = [
            ConditionalPool(
                asset_reserve=asset,
                stable_reserve=stable,
                fee_bps=fee_bps,
                outcome_index=i,
            )
            for i, (asset, stable) in enumerate(conditionals)
        ]
        return cls(spot=spot_pool, conditionals=pools)

    @property
    def n_outcomes(self) -> int:
        return len(self.conditionals)

    def spot_snapshot(self) -> PoolSnapshot:
        return self.spot.snapshot()

    def conditional_snapshots(self) -> list[PoolSnapshot]:
        return [pool.snapshot() for pool in self.conditionals]

    def working_copy(self) -> MarketState:
        """Copy pools and escrow so a sequence of swaps can be staged."""
        return MarketState(
            spot=copy.copy(self.spot),
            conditionals=[copy.copy(pool) for pool in self.conditionals],
            escrow=copy.deepcopy(self.escrow),
        )

    def commit(self, state: MarketState) -> None:
        """Write a staged copy back into the live pools and escrow."""
        with self.lock:
            _assign(self.spot, state.spot)
            for live, staged in zip(self.conditionals, state.conditionals):
                _assign(live, staged)
            _assign(self.escrow, state.escrow)


def _assign(target, source) -> None:
    for f in fields(source):
        setattr(target, f.name, getattr(source, f.name))
