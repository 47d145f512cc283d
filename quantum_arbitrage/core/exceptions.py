"""Exception types for quoting, searching and settlement.

Quoting and search recover locally through sentinel values; these are
raised for invalid inputs and by settlement.
"""

__all__ = [
    "ArbitrageError",
    "NumericOverflow",
    "PoolExhausted",
    "SearchNonTermination",
    "InsufficientProfit",
    "InvalidPoolError",
    "InvalidMarketError",
    "SlippageExceeded",
    "EscrowError",
]


class ArbitrageError(Exception):
    """Base class for all quantum arbitrage errors."""
    pass


class NumericOverflow(ArbitrageError):
    """Raised by checked arithmetic when a result exceeds its bound."""

    def __init__(self, value: int, limit: int):
        super().__init__(f"value {value} exceeds limit {limit}")
        self.value = value
        self.limit = limit


class PoolExhausted(ArbitrageError):
    """Raised when a live swap would drain a pool's output reserve."""

    def __init__(self, requested_out: int, reserve_out: int):
        super().__init__(
            f"Requested out={requested_out} meets or exceeds reserve={reserve_out}"
        )
        self.requested_out = requested_out
        self.reserve_out = reserve_out


class SearchNonTermination(ArbitrageError):
    """Raised when the ternary search passes its proven iteration ceiling."""
    pass


class InsufficientProfit(ArbitrageError):
    """Raised when realized profit falls below the caller's minimum.

    Args:
        realized: Profit the execution would have produced (may be negative)
        minimum: The caller's minimum acceptable profit
    """

    def __init__(self, realized: int, minimum: int):
        super().__init__(f"Realized profit {realized} is below minimum {minimum}")
        self.realized = realized
        self.minimum = minimum


class InvalidPoolError(ArbitrageError, ValueError):
    """Raised when pool reserves or fee violate their domain."""
    pass


class InvalidMarketError(ArbitrageError, ValueError):
    """Raised when a market has the wrong number or ordering of conditional pools."""
    pass


class SlippageExceeded(ArbitrageError):
    """Raised when a live swap misses its min_out / max_in bound."""
    pass


class EscrowError(ArbitrageError):
    """Raised when escrow backing cannot cover a withdrawal."""
    pass
