"""Shared test fixtures."""

import pytest

from src.pm_common.datetime_utils import ManualClock
from src.pm_custody.infrastructure.memory import InMemoryCustody
from src.pm_market.application.schemas import MarketDetail
from src.pm_market.application.service import MarketService

T0 = 1_700_000_000
DEADLINE = T0 + 86_400


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(T0)


@pytest.fixture
def custody() -> InMemoryCustody:
    return InMemoryCustody()


@pytest.fixture
def service(custody: InMemoryCustody, clock: ManualClock) -> MarketService:
    """Service with invariant checks on after every commit."""
    return MarketService(custody, clock=clock, verify_invariants=True)


@pytest.fixture
async def market(service: MarketService) -> MarketDetail:
    """Open market: goal 1_000_000, deadline one day after T0."""
    return await service.initialize(
        authority="authority",
        reference_mint="usdc-mint",
        yes_mint="yes-mint",
        no_mint="no-mint",
        fundraising_goal=1_000_000,
        deadline=DEADLINE,
        project_name="Indie Star",
    )
