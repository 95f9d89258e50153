"""Redemption — winning tokens exchanged 1:1 for escrowed reference currency.

Only legal after settlement and only for the winning mint. The winning
reserve and the reference reserve both shrink by ``amount`` so the reserves
keep matching circulating supply and escrowed funds.
An escrow shortfall is reported as InsufficientLiquidityError before any
custody call, not as the custody layer's insufficient-balance error.
"""
import logging

from src.pm_clearing.infrastructure.ledger import MarketLedger
from src.pm_common.enums import LedgerEntryType
from src.pm_common.errors import (
    InsufficientLiquidityError,
    MarketNotSettledError,
    WrongTokenTypeError,
)
from src.pm_common.u64 import checked_sub, require_positive_u64
from src.pm_custody.domain.repository import CustodyProtocol
from src.pm_custody.domain.transaction import CustodyTransaction
from src.pm_market.domain.models import Market, Reserves
from src.pm_risk.rules.market_status import check_settled

logger = logging.getLogger(__name__)


async def execute_redeem(
    market: Market,
    holder: str,
    token: str,
    amount: int,
    now: int,
    custody: CustodyProtocol,
    ledger: MarketLedger,
) -> int:
    """Returns the reference amount paid to ``holder`` (always ``amount``)."""
    check_settled(market)
    winner = market.winning_outcome
    if winner is None:
        raise MarketNotSettledError(market.id)
    if token != market.mint_of(winner):
        raise WrongTokenTypeError(token)
    require_positive_u64(amount, "amount")

    reserves = Reserves.of(market)
    winning_reserve = market.reserve_of(winner)
    if amount > winning_reserve:
        raise InsufficientLiquidityError(amount, winning_reserve)
    if amount > reserves.reference:
        raise InsufficientLiquidityError(amount, reserves.reference)
    new_reserves = Reserves(
        yes=reserves.yes, no=reserves.no, reference=checked_sub(reserves.reference, amount)
    ).with_outcome(winner, checked_sub(winning_reserve, amount))

    async with CustodyTransaction(custody) as tx:
        await tx.burn(token, holder, amount)
        await tx.transfer(market.reference_mint, market.pool_account, holder, amount)

    new_reserves.apply_to(market)
    ledger.write(market, LedgerEntryType.REDEEM, holder, winner, amount, amount, now)

    logger.info(
        "Redeemed %d %s tokens: market=%s holder=%s", amount, winner.value, market.id, holder
    )
    return amount
