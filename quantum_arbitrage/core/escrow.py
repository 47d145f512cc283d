"""Quantum-split escrow and per-outcome balances.

Depositing one unit of base currency mints one conditional unit for every
outcome at once; burning one unit of every outcome (a complete set)
releases one unit of base currency.
"""

from dataclasses import dataclass, field

from quantum_arbitrage.core.exceptions import EscrowError


@dataclass
class QuantumBalance:
    """Per-outcome conditional holdings during one arbitrage execution.

    Index ``i`` corresponds to the market's conditional pool ``i``.
    """
    asset: list[int]
    stable: list[int]

    def __post_init__(self) -> None:
        if len(self.asset) != len(self.stable):
            raise ValueError(
                f"asset and stable must have equal length, got {len(self.asset)} and {len(self.stable)}"
            )

    @classmethod
    def empty(cls, n_outcomes: int) -> "QuantumBalance":
        return cls(asset=[0] * n_outcomes, stable=[0] * n_outcomes)

    @property
    def n_outcomes(self) -> int:
        return len(self.asset)

    def split_asset(self, amount: int) -> None:
        """Credit ``amount`` conditional asset to every outcome."""
        self.asset = [a + amount for a in self.asset]

    def split_stable(self, amount: int) -> None:
        """Credit ``amount`` conditional stable to every outcome."""
        self.stable = [s + amount for s in self.stable]

    def debit_asset(self, outcome: int, amount: int) -> None:
        if self.asset[outcome] < amount:
            raise EscrowError(
                f"outcome {outcome} holds {self.asset[outcome]} asset, cannot debit {amount}"
            )
        self.asset[outcome] -= amount

    def debit_stable(self, outcome: int, amount: int) -> None:
        if self.stable[outcome] < amount:
            raise EscrowError(
                f"outcome {outcome} holds {self.stable[outcome]} stable, cannot debit {amount}"
            )
        self.stable[outcome] -= amount

    def credit_asset(self, outcome: int, amount: int) -> None:
        self.asset[outcome] += amount

    def credit_stable(self, outcome: int, amount: int) -> None:
        self.stable[outcome] += amount

    def complete_set_asset(self) -> int:
        """Largest asset amount held uniformly across every outcome."""
        return min(self.asset) if self.asset else 0

    def complete_set_stable(self) -> int:
        """Largest stable amount held uniformly across every outcome."""
        return min(self.stable) if self.stable else 0

    def burn_asset(self, amount: int) -> None:
        for outcome in range(self.n_outcomes):
            self.debit_asset(outcome, amount)

    def burn_stable(self, amount: int) -> None:
        for outcome in range(self.n_outcomes):
            self.debit_stable(outcome, amount)

    @property
    def is_empty(self) -> bool:
        return not any(self.asset) and not any(self.stable)

    def copy(self) -> "QuantumBalance":
        return QuantumBalance(asset=list(self.asset), stable=list(self.stable))


@dataclass
class TokenEscrow:
    """Base-currency backing for every outcome's conditional tokens.

    Every outcome's supply equals the backing: deposits mint into all
    outcomes and withdrawals require burning a complete set.
    """
    n_outcomes: int
    asset_backing: int = 0
    stable_backing: int = 0
    asset_supply: list[int] = field(default_factory=list)
    stable_supply: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.n_outcomes <= 0:
            raise ValueError(f"n_outcomes must be > 0, got {self.n_outcomes}")
        if not self.asset_supply:
            self.asset_supply = [self.asset_backing] * self.n_outcomes
        if not self.stable_supply:
            self.stable_supply = [self.stable_backing] * self.n_outcomes

    @classmethod
    def backing_pools(cls, pools) -> "TokenEscrow":
        """Escrow whose backing covers the reserves of every conditional pool."""
        return cls(
            n_outcomes=len(pools),
            asset_backing=max(p.asset_reserve for p in pools),
            stable_backing=max(p.stable_reserve for p in pools),
        )

    def deposit_asset(self, amount: int) -> None:
        self.asset_backing += amount
        self.asset_supply = [s + amount for s in self.asset_supply]

    def deposit_stable(self, amount: int) -> None:
        self.stable_backing += amount
        self.stable_supply = [s + amount for s in self.stable_supply]

    def burn_complete_set_asset(self, amount: int) -> int:
        """Burn ``amount`` asset from every outcome and release the backing."""
        if amount > self.asset_backing or any(s < amount for s in self.asset_supply):
            raise EscrowError(
                f"cannot burn {amount} asset complete set, backing is {self.asset_backing}"
            )
        self.asset_backing -= amount
        self.asset_supply = [s - amount for s in self.asset_supply]
        return amount

    def burn_complete_set_stable(self, amount: int) -> int:
        """Burn ``amount`` stable from every outcome and release the backing."""
        if amount > self.stable_backing or any(s < amount for s in self.stable_supply):
            raise EscrowError(
                f"cannot burn {amount} stable complete set, backing is {self.stable_backing}"
            )
        self.stable_backing -= amount
        self.stable_supply = [s - amount for s in self.stable_supply]
        return amount

    def check_invariants(self) -> None:
        if any(s != self.asset_backing for s in self.asset_supply):
            raise EscrowError(
                f"asset supply {self.asset_supply} diverged from backing {self.asset_backing}"
            )
        if any(s != self.stable_backing for s in self.stable_supply):
            raise EscrowError(
                f"stable supply {self.stable_supply} diverged from backing {self.stable_backing}"
            )
