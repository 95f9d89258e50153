"""Unit tests for MarketService orchestration."""

import asyncio

import pytest

from src.pm_common.datetime_utils import ManualClock
from src.pm_common.enums import MarketStatus, Outcome
from src.pm_common.errors import (
    InsufficientLiquidityError,
    InvalidDeadlineError,
    InvalidMintConfigurationError,
    InvalidOutcomeError,
    MarketAlreadyExistsError,
    MarketNotFoundError,
)
from src.pm_custody.infrastructure.memory import InMemoryCustody
from src.pm_market.application.schemas import MarketDetail
from src.pm_market.application.service import MarketService
from src.pm_market.domain.identity import derive_market_id, derive_pool_account


class _YieldingCustody(InMemoryCustody):
    """Yields to the event loop inside every primitive to expose interleaving."""

    async def transfer(self, token: str, source: str, dest: str, amount: int) -> None:
        await asyncio.sleep(0)
        await super().transfer(token, source, dest, amount)

    async def mint(self, token: str, to: str, amount: int) -> None:
        await asyncio.sleep(0)
        await super().mint(token, to, amount)


class TestInitialize:
    async def test_creates_open_market(self, market: MarketDetail, clock: ManualClock) -> None:
        assert market.id == derive_market_id("authority", "Indie Star")
        assert market.pool_account == derive_pool_account(market.id)
        assert market.status == MarketStatus.OPEN
        assert (market.yes_reserve, market.no_reserve, market.reference_reserve) == (0, 0, 0)
        assert market.winning_outcome is None
        assert market.yes_probability_bps is None
        assert market.created_at == clock.now()

    async def test_duplicate_project_rejected(
        self, service: MarketService, market: MarketDetail
    ) -> None:
        with pytest.raises(MarketAlreadyExistsError):
            await service.initialize(
                "authority", "usdc-2", "yes-2", "no-2", 5, market.deadline, "Indie Star"
            )

    async def test_same_project_other_authority(
        self, service: MarketService, market: MarketDetail
    ) -> None:
        other = await service.initialize(
            "someone-else", "usdc-mint", "yes-2", "no-2", 5, market.deadline, "Indie Star"
        )
        assert other.id != market.id
        assert len(service.list_markets()) == 2

    async def test_deadline_must_be_future(
        self, service: MarketService, clock: ManualClock
    ) -> None:
        with pytest.raises(InvalidDeadlineError):
            await service.initialize("a", "usdc", "yes", "no", 1, clock.now(), "Past")
        assert service.list_markets() == []

    @pytest.mark.parametrize(
        "mints",
        [
            ("usdc-mint", "yes-mint", "no-2"),
            ("usdc-mint", "yes-2", "no-mint"),
            ("usdc-mint", "no-mint", "yes-2"),
            ("usdc-2", "usdc-mint", "no-2"),
            ("yes-mint", "yes-2", "no-2"),
        ],
    )
    async def test_mint_bound_to_other_market_rejected(
        self, service: MarketService, market: MarketDetail, mints: tuple[str, str, str]
    ) -> None:
        reference_mint, yes_mint, no_mint = mints
        with pytest.raises(InvalidMintConfigurationError):
            await service.initialize(
                "authority", reference_mint, yes_mint, no_mint, 5, market.deadline, "Other"
            )
        assert [m.id for m in service.list_markets()] == [market.id]

    async def test_markets_with_own_mints_trade_independently(
        self, service: MarketService, custody: InMemoryCustody, market: MarketDetail
    ) -> None:
        other = await service.initialize(
            "authority", "usdc-mint", "yes-2", "no-2", 5, market.deadline, "Other"
        )
        custody.fund("usdc-mint", "alice", 150)
        assert await service.buy(market.id, "alice", Outcome.YES, 100) == 100
        assert await service.buy(other.id, "alice", Outcome.YES, 50) == 50
        assert service.get_market(market.id).yes_reserve == 100
        assert service.get_market(other.id).yes_reserve == 50


class TestReadSide:
    async def test_unknown_market(self, service: MarketService) -> None:
        with pytest.raises(MarketNotFoundError):
            service.get_market("nope")
        with pytest.raises(MarketNotFoundError):
            await service.buy("nope", "alice", Outcome.YES, 1)

    async def test_snapshot_is_detached(
        self, service: MarketService, custody: InMemoryCustody, market: MarketDetail
    ) -> None:
        custody.fund(market.reference_mint, "alice", 100)
        before = service.get_market(market.id)
        await service.buy(market.id, "alice", Outcome.YES, 100)
        assert before.yes_reserve == 0
        assert service.get_market(market.id).yes_reserve == 100

    async def test_quotes_match_execution(
        self, service: MarketService, custody: InMemoryCustody, market: MarketDetail
    ) -> None:
        custody.fund(market.reference_mint, "alice", 2_000)
        await service.buy(market.id, "alice", Outcome.YES, 1_000)

        quote = service.quote_buy(market.id, Outcome.YES, 500)
        assert service.get_market(market.id).yes_reserve == 1_000  # quoting is read-only
        assert await service.buy(market.id, "alice", Outcome.YES, 500) == quote.amount_out

        sell_quote = service.quote_sell(market.id, Outcome.YES, 200)
        assert await service.sell(market.id, "alice", Outcome.YES, 200) == sell_quote.amount_out

    async def test_quote_sell_above_reserve(
        self, service: MarketService, market: MarketDetail
    ) -> None:
        with pytest.raises(InsufficientLiquidityError):
            service.quote_sell(market.id, Outcome.NO, 1)

    async def test_unknown_outcome_leaves_market_untouched(
        self, service: MarketService, custody: InMemoryCustody, market: MarketDetail
    ) -> None:
        custody.fund(market.reference_mint, "alice", 100)
        with pytest.raises(InvalidOutcomeError):
            await service.buy(market.id, "alice", "MAYBE", 100)
        with pytest.raises(InvalidOutcomeError):
            service.quote_buy(market.id, "MAYBE", 100)
        snapshot = service.get_market(market.id)
        assert (snapshot.yes_reserve, snapshot.no_reserve, snapshot.reference_reserve) == (0, 0, 0)
        assert await custody.balance_of(market.reference_mint, "alice") == 100
        assert service.ledger_entries(market.id) == []

    async def test_probability_and_ledger(
        self, service: MarketService, custody: InMemoryCustody, market: MarketDetail
    ) -> None:
        custody.fund(market.reference_mint, "alice", 1_000)
        custody.fund(market.reference_mint, "bob", 500)
        await service.buy(market.id, "alice", Outcome.YES, 1_000)
        await service.buy(market.id, "bob", Outcome.NO, 500)

        assert service.get_market(market.id).yes_probability_bps == 6666
        assert [e.holder for e in service.ledger_entries(market.id)] == ["alice", "bob"]


class TestSerialization:
    async def test_concurrent_buys_conserve_reference(self, clock: ManualClock) -> None:
        custody = _YieldingCustody()
        service = MarketService(custody, clock=clock, verify_invariants=True)
        market = await service.initialize(
            "authority", "usdc", "yes", "no", 1_000, clock.now() + 60, "Concurrent"
        )
        amounts = list(range(100, 2_100, 100))
        for i, amount in enumerate(amounts):
            custody.fund("usdc", f"trader-{i}", amount)

        minted = await asyncio.gather(
            *(
                service.buy(market.id, f"trader-{i}", Outcome.YES, amount)
                for i, amount in enumerate(amounts)
            )
        )

        snapshot = service.get_market(market.id)
        assert snapshot.reference_reserve == sum(amounts)
        assert snapshot.yes_reserve == sum(minted)
        assert await custody.total_supply("yes") == sum(minted)
        assert len(service.ledger_entries(market.id)) == len(amounts)
