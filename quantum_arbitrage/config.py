"""Shared protocol ceilings and search configuration."""

from dataclasses import dataclass
import os

# Protocol ceilings
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1
FEE_DENOMINATOR = 10_000
MIN_CONDITIONALS = 2
MAX_CONDITIONALS = 50
DEFAULT_FEE_BPS = 30

# Ternary search. A coarse threshold below 3 lets the interval stall at
# width 2 with (right - left) // 3 == 0.
MIN_COARSE_THRESHOLD = 3
DEFAULT_COARSE_THRESHOLD = 10

# Evaluation budget for one directional search at U64 scale with the
# default threshold: two per coarse iteration plus the refinement scan.
MAX_EVALUATIONS_PER_SEARCH = 256

COARSE_THRESHOLD_ENV = "QUANTUM_ARB_COARSE_THRESHOLD"


@dataclass(frozen=True)
class SearchSettings:
    coarse_threshold: int = DEFAULT_COARSE_THRESHOLD

    def __post_init__(self) -> None:
        if self.coarse_threshold < MIN_COARSE_THRESHOLD:
            raise ValueError(
                f"coarse_threshold must be >= {MIN_COARSE_THRESHOLD}, got {self.coarse_threshold}"
            )


DEFAULT_SEARCH_SETTINGS = SearchSettings(coarse_threshold=DEFAULT_COARSE_THRESHOLD)


@dataclass(frozen=True)
class BenchmarkSettings:
    seed: int
    n_markets: int
    min_outcomes: int
    max_outcomes: int
    max_reserve: int


BENCHMARK_SETTINGS = BenchmarkSettings(
    seed=7,
    n_markets=25,
    min_outcomes=MIN_CONDITIONALS,
    max_outcomes=MAX_CONDITIONALS,
    max_reserve=U64_MAX,
)


def resolve_coarse_threshold() -> int:
    """Resolve the coarse search threshold from environment or default."""
    raw = os.environ.get(COARSE_THRESHOLD_ENV)
    if raw is None or raw == "":
        return DEFAULT_COARSE_THRESHOLD
    try:
        threshold = int(raw)
    except ValueError:
        raise ValueError(f"{COARSE_THRESHOLD_ENV} must be an integer, got {raw!r}") from None
    if threshold < MIN_COARSE_THRESHOLD:
        raise ValueError(
            f"{COARSE_THRESHOLD_ENV} must be >= {MIN_COARSE_THRESHOLD}, got {threshold}"
        )
    return threshold


def resolve_search_settings() -> SearchSettings:
    """Search settings with the coarse threshold taken from the environment."""
    return SearchSettings(coarse_threshold=resolve_coarse_threshold())
