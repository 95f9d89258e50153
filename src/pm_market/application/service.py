"""MarketService — stateful orchestrator for market lifecycle operations.

Every operation on a market runs under that market's asyncio.Lock, so the
reserve read, the custody calls and the commit form one critical section.
Operations on different markets do not block each other.
"""
import asyncio
import logging
from collections import defaultdict

from config.settings import settings
from src.pm_amm.domain.pricing import quote_burn, quote_mint
from src.pm_clearing.domain.buy_service import execute_buy
from src.pm_clearing.domain.invariants import verify_market_invariants
from src.pm_clearing.domain.models import LedgerEntry
from src.pm_clearing.domain.redemption import execute_redeem
from src.pm_clearing.domain.sell_service import execute_sell
from src.pm_clearing.domain.settlement import settle_market
from src.pm_clearing.infrastructure.ledger import MarketLedger
from src.pm_common.datetime_utils import Clock, SystemClock
from src.pm_common.enums import Outcome
from src.pm_common.errors import (
    InvalidMintConfigurationError,
    MarketAlreadyExistsError,
    MarketNotFoundError,
)
from src.pm_common.u64 import require_u64
from src.pm_custody.domain.repository import CustodyProtocol
from src.pm_market.application.schemas import MarketDetail, QuoteResponse
from src.pm_market.domain.identity import derive_market_id, derive_pool_account
from src.pm_market.domain.models import Market
from src.pm_risk.rules.market_params import check_market_params, check_outcome

logger = logging.getLogger(__name__)


class MarketService:
    def __init__(
        self,
        custody: CustodyProtocol,
        clock: Clock | None = None,
        ledger: MarketLedger | None = None,
        verify_invariants: bool | None = None,
    ) -> None:
        self._custody = custody
        self._clock: Clock = clock or SystemClock()
        self._ledger = ledger or MarketLedger()
        self._verify = (
            settings.VERIFY_INVARIANTS if verify_invariants is None else verify_invariants
        )
        self._markets: dict[str, Market] = {}
        self._market_locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        logger.info(
            "%s market service started (verify_invariants=%s)", settings.APP_NAME, self._verify
        )

    def _get_or_create_lock(self, market_id: str) -> asyncio.Lock:
        return self._market_locks[market_id]

    def _get_market(self, market_id: str) -> Market:
        market = self._markets.get(market_id)
        if market is None:
            raise MarketNotFoundError(market_id)
        return market

    def _check_mints_unbound(self, reference_mint: str, yes_mint: str, no_mint: str) -> None:
        """A position mint belongs to exactly one market; its supply is that market's reserve."""
        for other in self._markets.values():
            bound = {other.yes_mint, other.no_mint}
            for mint in (yes_mint, no_mint):
                if mint in bound or mint == other.reference_mint:
                    raise InvalidMintConfigurationError(
                        f"Mint {mint} is already used by market {other.id}"
                    )
            if reference_mint in bound:
                raise InvalidMintConfigurationError(
                    f"Mint {reference_mint} is a position mint of market {other.id}"
                )

    async def _after_commit(self, market: Market) -> None:
        if self._verify:
            await verify_market_invariants(market, self._ledger, self._custody)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(
        self,
        authority: str,
        reference_mint: str,
        yes_mint: str,
        no_mint: str,
        fundraising_goal: int,
        deadline: int,
        project_name: str,
    ) -> MarketDetail:
        now = self._clock.now()
        check_market_params(
            reference_mint, yes_mint, no_mint, fundraising_goal, deadline, project_name, now
        )
        market_id = derive_market_id(authority, project_name)
        async with self._get_or_create_lock(market_id):
            if market_id in self._markets:
                raise MarketAlreadyExistsError(market_id)
            self._check_mints_unbound(reference_mint, yes_mint, no_mint)
            market = Market(
                id=market_id,
                authority=authority,
                reference_mint=reference_mint,
                yes_mint=yes_mint,
                no_mint=no_mint,
                pool_account=derive_pool_account(market_id),
                fundraising_goal=fundraising_goal,
                deadline=deadline,
                project_name=project_name,
                created_at=now,
            )
            self._markets[market_id] = market
        logger.info(
            "Market initialized: %s | goal=%d deadline=%d id=%s",
            project_name,
            fundraising_goal,
            deadline,
            market_id,
        )
        return MarketDetail.from_domain(market)

    async def buy(self, market_id: str, buyer: str, outcome: Outcome, amount_in: int) -> int:
        market = self._get_market(market_id)
        async with self._get_or_create_lock(market_id):
            amount_out = await execute_buy(
                market, buyer, outcome, amount_in, self._clock.now(), self._custody, self._ledger
            )
            await self._after_commit(market)
        return amount_out

    async def sell(
        self, market_id: str, seller: str, outcome: Outcome, amount_tokens: int
    ) -> int:
        market = self._get_market(market_id)
        async with self._get_or_create_lock(market_id):
            amount_out = await execute_sell(
                market,
                seller,
                outcome,
                amount_tokens,
                self._clock.now(),
                self._custody,
                self._ledger,
            )
            await self._after_commit(market)
        return amount_out

    async def settle(self, market_id: str, caller: str, observed_result: int) -> Outcome:
        market = self._get_market(market_id)
        async with self._get_or_create_lock(market_id):
            winner = settle_market(market, caller, observed_result, self._clock.now(), self._ledger)
            await self._after_commit(market)
        return winner

    async def redeem(self, market_id: str, holder: str, token: str, amount: int) -> int:
        market = self._get_market(market_id)
        async with self._get_or_create_lock(market_id):
            paid = await execute_redeem(
                market, holder, token, amount, self._clock.now(), self._custody, self._ledger
            )
            await self._after_commit(market)
        return paid

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def get_market(self, market_id: str) -> MarketDetail:
        return MarketDetail.from_domain(self._get_market(market_id))

    def list_markets(self) -> list[MarketDetail]:
        return [MarketDetail.from_domain(m) for m in self._markets.values()]

    def ledger_entries(self, market_id: str) -> list[LedgerEntry]:
        self._get_market(market_id)
        return self._ledger.entries(market_id)

    def quote_buy(self, market_id: str, outcome: Outcome, amount_in: int) -> QuoteResponse:
        market = self._get_market(market_id)
        outcome = check_outcome(outcome)
        require_u64(amount_in, "amount_in")
        amount_out = quote_mint(amount_in, market.reserve_of(outcome), market.reference_reserve)
        return QuoteResponse(
            market_id=market_id, outcome=outcome, amount_in=amount_in, amount_out=amount_out
        )

    def quote_sell(self, market_id: str, outcome: Outcome, amount_tokens: int) -> QuoteResponse:
        market = self._get_market(market_id)
        outcome = check_outcome(outcome)
        require_u64(amount_tokens, "amount_tokens")
        amount_out = quote_burn(
            amount_tokens, market.reserve_of(outcome), market.reference_reserve
        )
        return QuoteResponse(
            market_id=market_id, outcome=outcome, amount_in=amount_tokens, amount_out=amount_out
        )
