"""Pytest configuration and fixtures."""

import pytest

from bonding.market import BondingCurveMarket
from bonding.runtime import Runtime
from tests.helpers import make_market


@pytest.fixture
def runtime() -> Runtime:
    """A fresh runtime with no balances, payees or events."""
    return Runtime()


@pytest.fixture
def market(runtime: Runtime) -> BondingCurveMarket:
    """Reference-curve market with ALICE, BOB and CAROL funded."""
    return make_market(runtime)

