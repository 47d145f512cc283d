"""Pytest configuration and shared fixtures for quantum arbitrage tests.

This module provides:
- Pytest markers for test categorization
- Shared fixtures for the reference scenarios
- Live market fixtures for settlement tests
"""

import pytest

from quantum_arbitrage.core.market import Market
from quantum_arbitrage.market.arbitrageur import Arbitrageur
from quantum_arbitrage.settlement.complete_set import CompleteSetExecutor, Recipient
from tests.fixtures.market_fixtures import (
    SnapshotScenario,
    make_market,
    scenario_a,
    scenario_b,
    scenario_c,
    scenario_d,
)


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "economic: Core economic property tests (quantum pricing, arbitrage)"
    )
    config.addinivalue_line(
        "markers", "edge_case: Edge case and stress tests with extreme inputs"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests spanning multiple components"
    )
    config.addinivalue_line(
        "markers", "slow: Tests taking more than 5 seconds to run"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on location and name."""
    for item in items:
        if "edge_case" in item.nodeid or "stress" in item.nodeid:
            item.add_marker(pytest.mark.edge_case)

        if any(keyword in item.nodeid for keyword in ["arbitrageur", "complete_set", "cli"]):
            item.add_marker(pytest.mark.integration)

        if any(keyword in item.nodeid for keyword in ["aggregator", "simulator", "arbitrageur"]):
            item.add_marker(pytest.mark.economic)


# ============================================================================
# Scenario Fixtures
# ============================================================================


@pytest.fixture
def arbitrageur() -> Arbitrageur:
    """Arbitrageur with the default search settings."""
    return Arbitrageur()


@pytest.fixture
def mispriced_scenario() -> SnapshotScenario:
    """Scenario A: conditionals price the asset above spot."""
    return scenario_a()


@pytest.fixture
def balanced_scenario() -> SnapshotScenario:
    """Scenario B: spot and 50 conditionals with identical reserves."""
    return scenario_b()


@pytest.fixture
def tiny_scenario() -> SnapshotScenario:
    """Scenario C: reserves around 100."""
    return scenario_c()


@pytest.fixture
def near_max_scenario() -> SnapshotScenario:
    """Scenario D: 50 conditionals near U64_MAX."""
    return scenario_d()


# ============================================================================
# Live Market Fixtures
# ============================================================================


@pytest.fixture
def expensive_conditionals_market() -> Market:
    """Conditionals price the asset above spot: buy on spot, sell conditionals."""
    return make_market(
        (1_000_000, 1_000_000),
        [(900_000, 1_100_000), (920_000, 1_080_000), (880_000, 1_120_000)],
    )


@pytest.fixture
def cheap_conditionals_market() -> Market:
    """Conditionals price the asset below spot: buy conditionals, sell on spot."""
    return make_market(
        (1_000_000, 1_000_000),
        [(1_100_000, 900_000), (1_080_000, 920_000), (1_120_000, 880_000)],
    )


@pytest.fixture
def executor() -> CompleteSetExecutor:
    return CompleteSetExecutor()


@pytest.fixture
def recipient() -> Recipient:
    return Recipient(name="test-arbitrageur")
