"""Command-line interface for pricing and stress-testing arbitrage."""

import argparse
import logging
import sys
import time
from typing import Optional

from quantum_arbitrage.config import (
    BENCHMARK_SETTINGS,
    DEFAULT_FEE_BPS,
    MAX_EVALUATIONS_PER_SEARCH,
    MIN_CONDITIONALS,
    SearchSettings,
    resolve_search_settings,
)
from quantum_arbitrage.core.exceptions import ArbitrageError
from quantum_arbitrage.core.trade import PoolSnapshot, SearchHint
from quantum_arbitrage.market.arbitrageur import Arbitrageur
from quantum_arbitrage.market.scenarios import ScenarioGenerator
from quantum_arbitrage.market.simulator import simulate


def _parse_pair(text: str) -> tuple[int, int]:
    """Parse ``"A:B"`` into two non-negative integers."""
    try:
        first, second = text.split(":")
        return int(first), int(second)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected INT:INT, got {text!r}") from None


def _settings(args: argparse.Namespace) -> SearchSettings:
    if args.threshold is not None:
        return SearchSettings(coarse_threshold=args.threshold)
    return resolve_search_settings()


def optimize_command(args: argparse.Namespace) -> int:
    """Price one market given on the command line."""
    if len(args.cond) < MIN_CONDITIONALS:
        print(f"Error: at least {MIN_CONDITIONALS} --cond pools are required")
        return 1

    try:
        spot = PoolSnapshot(
            asset_reserve=args.spot[0],
            stable_reserve=args.spot[1],
            fee_bps=args.spot_fee if args.spot_fee is not None else args.fee,
        )
        conditionals = [
            PoolSnapshot(asset_reserve=a, stable_reserve=s, fee_bps=args.fee, outcome=i)
            for i, (a, s) in enumerate(args.cond)
        ]
        hint = SearchHint(*args.hint) if args.hint is not None else None
        arbitrageur = Arbitrageur(_settings(args))
        result = arbitrageur.find_arbitrage(spot, conditionals, hint)
    except (ArbitrageError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    print(f"Outcomes:    {len(conditionals)}")
    print(f"Spot price:  {spot.spot_price:.6f}")
    if not result.is_profitable:
        print("No arbitrage found")
    else:
        print(f"Direction:   {result.direction.value}")
        print(f"Amount:      {result.amount}")
        print(f"Profit:      {result.profit}")
    print(f"Evaluations: {result.evaluations}")
    return 0


def bench_command(args: argparse.Namespace) -> int:
    """Run randomized markets and check the evaluation and consistency bounds."""
    seed = args.seed if args.seed is not None else BENCHMARK_SETTINGS.seed
    n_markets = args.markets if args.markets is not None else BENCHMARK_SETTINGS.n_markets
    generator = ScenarioGenerator(seed=seed, max_reserve=BENCHMARK_SETTINGS.max_reserve)
    arbitrageur = Arbitrageur(_settings(args))

    builders = (
        lambda n: generator.random_market(n),
        lambda n: generator.perturbed_market(n, base_reserve=1_000_000),
        lambda n: generator.near_max_market(n),
    )

    evaluations = []
    failures = 0
    start = time.perf_counter()
    for i in range(n_markets):
        if args.outcomes is not None:
            n_outcomes = args.outcomes
        else:
            n_outcomes = generator.outcome_count(
                BENCHMARK_SETTINGS.min_outcomes, BENCHMARK_SETTINGS.max_outcomes
            )
        scenario = builders[i % len(builders)](n_outcomes)
        result = arbitrageur.find_arbitrage(scenario.spot, scenario.conditionals)
        evaluations.append(result.evaluations)

        if result.evaluations > 2 * MAX_EVALUATIONS_PER_SEARCH:
            print(f"  {scenario.name}: {result.evaluations} evaluations exceeds budget")
            failures += 1
        if result.is_profitable:
            replay = simulate(result.direction, scenario.spot, scenario.conditionals, result.amount)
            if replay != result.profit:
                print(f"  {scenario.name}: replay profit {replay} != {result.profit}")
                failures += 1
    elapsed = time.perf_counter() - start

    print(f"Markets:          {n_markets}")
    print(f"Max evaluations:  {max(evaluations, default=0)}")
    print(f"Mean evaluations: {sum(evaluations) / max(len(evaluations), 1):.1f}")
    print(f"Elapsed:          {elapsed:.2f}s")
    if failures:
        print(f"FAILED: {failures} check(s)")
        return 1
    print("OK")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Quantum arbitrage - price spot/conditional market arbitrage",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  quantum-arb optimize --spot 1000000:1000000 --cond 900000:1100000 --cond 900000:1100000
  quantum-arb optimize --spot 100:100 --cond 95:105 --cond 105:95 --fee 0 --hint 0:50
  quantum-arb bench --seed 7 --markets 50
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--threshold",
        type=int,
        default=None,
        help="Coarse search threshold (defaults to QUANTUM_ARB_COARSE_THRESHOLD or 10)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    optimize_parser = subparsers.add_parser("optimize", help="Find the optimal arbitrage for one market")
    optimize_parser.add_argument(
        "--spot", type=_parse_pair, required=True, help="Spot reserves as ASSET:STABLE"
    )
    optimize_parser.add_argument(
        "--cond",
        type=_parse_pair,
        action="append",
        default=[],
        help="Conditional reserves as ASSET:STABLE (repeat once per outcome)",
    )
    optimize_parser.add_argument(
        "--fee", type=int, default=DEFAULT_FEE_BPS, help="Conditional pool fee in bps (default 30)"
    )
    optimize_parser.add_argument(
        "--spot-fee", type=int, default=None, help="Spot pool fee in bps (defaults to --fee)"
    )
    optimize_parser.add_argument(
        "--hint", type=_parse_pair, default=None, help="Search window as LOWER:UPPER (0 = no upper)"
    )
    optimize_parser.set_defaults(func=optimize_command)

    bench_parser = subparsers.add_parser("bench", help="Stress the optimizer on randomized markets")
    bench_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    bench_parser.add_argument("--markets", type=int, default=None, help="Number of markets")
    bench_parser.add_argument(
        "--outcomes", type=int, default=None, help="Fixed number of outcomes (default: random 2..50)"
    )
    bench_parser.set_defaults(func=bench_command)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except ValueError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
