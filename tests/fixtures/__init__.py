"""Test fixtures for quantum arbitrage testing."""

from tests.fixtures.market_fixtures import (
    CountingCurve,
    SnapshotScenario,
    make_conditionals,
    make_market,
    make_scenario,
    market_state,
    scenario_a,
    scenario_b,
    scenario_c,
    scenario_d,
)

__all__ = [
    "CountingCurve",
    "SnapshotScenario",
    "make_conditionals",
    "make_market",
    "make_scenario",
    "market_state",
    "scenario_a",
    "scenario_b",
    "scenario_c",
    "scenario_d",
]
