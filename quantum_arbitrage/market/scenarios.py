"""Randomized market generators for stress and fuzz runs."""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from quantum_arbitrage.config import FEE_DENOMINATOR, U64_MAX
from quantum_arbitrage.core.trade import PoolSnapshot


@dataclass
class MarketScenario:
    """A spot snapshot plus its conditional snapshots."""
    name: str
    spot: PoolSnapshot
    conditionals: list[PoolSnapshot]

    @property
    def n_outcomes(self) -> int:
        return len(self.conditionals)

    @property
    def largest_reserve(self) -> int:
        pools = [self.spot, *self.conditionals]
        return max(max(p.asset_reserve, p.stable_reserve) for p in pools)


class ScenarioGenerator:
    """Generates pool snapshots across the full u64 reserve range.

    Reserves are drawn log-uniformly by bit length so that tiny, typical
    and near-U64_MAX pools all show up in a modest number of draws.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        max_reserve: int = U64_MAX,
        max_fee_bps: int = 100,
    ):
        """
        Args:
            seed: Random seed for reproducibility
            max_reserve: Largest reserve to generate
            max_fee_bps: Largest fee to generate (exclusive of FEE_DENOMINATOR)
        """
        if not 1 <= max_reserve <= U64_MAX:
            raise ValueError(f"max_reserve must be in [1, U64_MAX], got {max_reserve}")
        if not 0 <= max_fee_bps < FEE_DENOMINATOR:
            raise ValueError(f"max_fee_bps must be in [0, {FEE_DENOMINATOR}), got {max_fee_bps}")
        self.max_reserve = max_reserve
        self.max_fee_bps = max_fee_bps
        self._rng = np.random.default_rng(seed)

    def reset(self, seed: Optional[int] = None) -> None:
        """Reset the random state."""
        if seed is not None:
            self._rng = np.random.default_rng(seed)

    def reserve(self) -> int:
        max_bits = self.max_reserve.bit_length()
        bits = int(self._rng.integers(1, max_bits, endpoint=True))
        low = 1 << (bits - 1)
        high = min((1 << bits) - 1, self.max_reserve)
        return int(self._rng.integers(low, high, endpoint=True, dtype=np.uint64))

    def fee_bps(self) -> int:
        return int(self._rng.integers(0, self.max_fee_bps, endpoint=True))

    def pool(self, outcome: Optional[int] = None, fee_bps: Optional[int] = None) -> PoolSnapshot:
        return PoolSnapshot(
            asset_reserve=self.reserve(),
            stable_reserve=self.reserve(),
            fee_bps=self.fee_bps() if fee_bps is None else fee_bps,
            outcome=outcome,
        )

    def random_market(self, n_outcomes: int) -> MarketScenario:
        """Fully independent spot and conditional pools."""
        return MarketScenario(
            name=f"random-{n_outcomes}",
            spot=self.pool(),
            conditionals=[self.pool(outcome=i) for i in range(n_outcomes)],
        )

    def perturbed_market(
        self,
        n_outcomes: int,
        base_reserve: int,
        spread: float = 0.05,
        fee_bps: int = 30,
    ) -> MarketScenario:
        """Conditional pools scattered around a balanced spot pool.

        Args:
            n_outcomes: Number of conditional pools
            base_reserve: Spot asset and stable reserve
            spread: Maximum relative deviation of each conditional reserve
            fee_bps: Fee for every pool
        """
        spot = PoolSnapshot(base_reserve, base_reserve, fee_bps)
        factors = self._rng.uniform(1.0 - spread, 1.0 + spread, size=(n_outcomes, 2))
        conditionals = [
            PoolSnapshot(
                asset_reserve=_clamp_reserve(base_reserve * float(fa)),
                stable_reserve=_clamp_reserve(base_reserve * float(fs)),
                fee_bps=fee_bps,
                outcome=i,
            )
            for i, (fa, fs) in enumerate(factors)
        ]
        return MarketScenario(
            name=f"perturbed-{n_outcomes}-{base_reserve}",
            spot=spot,
            conditionals=conditionals,
        )

    def near_max_market(self, n_outcomes: int, fee_bps: int = 30) -> MarketScenario:
        """Pools at or near U64_MAX, mixing full-scale and half-scale reserves."""
        full = self.max_reserve
        half = self.max_reserve // 2

        def scale() -> int:
            base = full if self._rng.random() < 0.5 else half
            jitter = int(self._rng.integers(0, 1 << 20))
            return max(1, base - jitter)

        return MarketScenario(
            name=f"near-max-{n_outcomes}",
            spot=PoolSnapshot(scale(), scale(), fee_bps),
            conditionals=[
                PoolSnapshot(scale(), scale(), fee_bps, outcome=i)
                for i in range(n_outcomes)
            ],
        )

    def outcome_count(self, low: int, high: int) -> int:
        return int(self._rng.integers(low, high, endpoint=True))


def _clamp_reserve(value: float) -> int:
    return min(max(int(value), 1), U64_MAX)
