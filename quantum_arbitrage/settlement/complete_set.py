"""Complete-set accounting: executes an arbitrage against live pools.

Every execution is staged on a copy of the market under the market lock
and committed in one step only once the realized profit clears the
caller's minimum. A rejected execution leaves pools, escrow and recipient
untouched.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from quantum_arbitrage.core.escrow import QuantumBalance
from quantum_arbitrage.core.exceptions import InsufficientProfit
from quantum_arbitrage.core.market import Market, MarketState
from quantum_arbitrage.core.trade import ArbitrageDirection, SearchHint
from quantum_arbitrage.market.arbitrageur import Arbitrageur

logger = logging.getLogger(__name__)


@dataclass
class Recipient:
    """Account receiving realized profit and leftover conditional dust."""
    name: str = "arbitrageur"
    stable_balance: int = 0
    dust: list[QuantumBalance] = field(default_factory=list)

    def credit(self, profit: int, dust: QuantumBalance) -> None:
        self.stable_balance += profit
        if not dust.is_empty:
            self.dust.append(dust.copy())


@dataclass(frozen=True)
class ExecutionReceipt:
    """What one executed arbitrage did.

    ``cost`` is the stable spent (spot purchase or quantum split) and
    ``proceeds`` the stable recovered; ``profit = proceeds - cost``.
    """
    direction: ArbitrageDirection
    amount: int
    cost: int
    proceeds: int
    complete_set_amount: int
    dust: QuantumBalance

    @property
    def profit(self) -> int:
        return self.proceeds - self.cost


class CompleteSetExecutor:
    """Executes spot/conditional arbitrage through quantum splits and complete sets."""

    def __init__(self, arbitrageur: Optional[Arbitrageur] = None):
        self.arbitrageur = arbitrageur if arbitrageur is not None else Arbitrageur()

    def arbitrage(
        self,
        market: Market,
        min_profit: int,
        recipient: Recipient,
        hint: Optional[SearchHint] = None,
    ) -> Optional[ExecutionReceipt]:
        """Find and execute the optimal arbitrage as one unit of work.

        Returns:
            ExecutionReceipt, or None if the market has no arbitrage

        Raises:
            InsufficientProfit: If realized profit is below ``min_profit``
        """
        with market.lock:
            result = self.arbitrageur.find_arbitrage(
                market.spot_snapshot(), market.conditional_snapshots(), hint
            )
            if not result.is_profitable:
                return None
            return self.execute(market, result.amount, result.direction, min_profit, recipient)

    def execute(
        self,
        market: Market,
        amount: int,
        direction: ArbitrageDirection,
        min_profit: int,
        recipient: Recipient,
    ) -> ExecutionReceipt:
        """Execute a sized arbitrage atomically.

        Args:
            market: Live market to trade against
            amount: Asset amount traded on every pool
            direction: Which market asset is bought from
            min_profit: Minimum acceptable realized profit in stable
            recipient: Receives the profit and the dust balance

        Returns:
            ExecutionReceipt describing the committed trade

        Raises:
            ValueError: If ``amount`` is not positive or ``min_profit`` is negative
            InsufficientProfit: If realized profit is below ``min_profit``
        """
        if amount <= 0:
            raise ValueError(f"amount must be > 0, got {amount}")
        if min_profit < 0:
            raise ValueError(f"min_profit must be >= 0, got {min_profit}")

        with market.lock:
            state = market.working_copy()
            if direction is ArbitrageDirection.SPOT_TO_CONDITIONAL:
                receipt = self._spot_to_conditional(state, amount)
            else:
                receipt = self._conditional_to_spot(state, amount)

            if receipt.profit < min_profit:
                logger.warning(
                    "Rejected %s arbitrage of %d: profit %d below minimum %d",
                    direction.value, amount, receipt.profit, min_profit,
                )
                raise InsufficientProfit(receipt.profit, min_profit)

            state.escrow.check_invariants()
            market.commit(state)
            recipient.credit(receipt.profit, receipt.dust)

        logger.info(
            "Executed %s arbitrage: amount=%d profit=%d complete_set=%d",
            direction.value, amount, receipt.profit, receipt.complete_set_amount,
        )
        return receipt

    def _spot_to_conditional(self, state: MarketState, amount: int) -> ExecutionReceipt:
        balance = QuantumBalance.empty(len(state.conditionals))

        # Buy on spot, funded by stable repaid from the proceeds
        cost = state.spot.buy_asset_exact(amount)

        # Quantum-split the asset into every outcome
        state.escrow.deposit_asset(amount)
        balance.split_asset(amount)

        for outcome, pool in enumerate(state.conditionals):
            balance.debit_asset(outcome, amount)
            balance.credit_stable(outcome, pool.swap_asset_for_stable(amount))

        complete_set = balance.complete_set_stable()
        balance.burn_stable(complete_set)
        proceeds = state.escrow.burn_complete_set_stable(complete_set)

        return ExecutionReceipt(
            direction=ArbitrageDirection.SPOT_TO_CONDITIONAL,
            amount=amount,
            cost=cost,
            proceeds=proceeds,
            complete_set_amount=complete_set,
            dust=balance,
        )

    def _conditional_to_spot(self, state: MarketState, amount: int) -> ExecutionReceipt:
        balance = QuantumBalance.empty(len(state.conditionals))

        # One split must cover the most expensive outcome
        split = max(pool.quote_asset_cost(amount) for pool in state.conditionals)
        state.escrow.deposit_stable(split)
        balance.split_stable(split)

        for outcome, pool in enumerate(state.conditionals):
            paid = pool.buy_asset_exact(amount, max_stable_in=balance.stable[outcome])
            balance.debit_stable(outcome, paid)
            balance.credit_asset(outcome, amount)

        complete_set = balance.complete_set_asset()
        balance.burn_asset(complete_set)
        released = state.escrow.burn_complete_set_asset(complete_set)
        proceeds = state.spot.swap_asset_for_stable(released)

        return ExecutionReceipt(
            direction=ArbitrageDirection.CONDITIONAL_TO_SPOT,
            amount=amount,
            cost=split,
            proceeds=proceeds,
            complete_set_amount=complete_set,
            dust=balance,
        )
