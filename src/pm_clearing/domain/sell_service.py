"""Sell — burn outcome tokens, receive reference currency from the pool.

Steps:
- Validate phase (unsettled, before deadline) and amount
- Price via quote_burn; fails with InsufficientLiquidity when the amount
  exceeds the outcome reserve
- Compute the post-trade reserves before touching custody
- Custody: burn outcome tokens from seller, then transfer reference pool -> seller
- Commit reserves, write SELL ledger entry
"""
import logging

from src.pm_amm.domain.pricing import quote_burn
from src.pm_clearing.infrastructure.ledger import MarketLedger
from src.pm_common.enums import LedgerEntryType, Outcome
from src.pm_common.u64 import checked_sub, require_positive_u64
from src.pm_custody.domain.repository import CustodyProtocol
from src.pm_custody.domain.transaction import CustodyTransaction
from src.pm_market.domain.models import Market, Reserves
from src.pm_risk.rules.market_params import check_outcome
from src.pm_risk.rules.market_status import check_trading_open

logger = logging.getLogger(__name__)


async def execute_sell(
    market: Market,
    seller: str,
    outcome: Outcome,
    amount_tokens: int,
    now: int,
    custody: CustodyProtocol,
    ledger: MarketLedger,
) -> int:
    """Returns the reference amount paid to ``seller``."""
    check_trading_open(market, now)
    outcome = check_outcome(outcome)
    require_positive_u64(amount_tokens, "amount_tokens")

    reserves = Reserves.of(market)
    outcome_reserve = market.reserve_of(outcome)
    amount_out = quote_burn(amount_tokens, outcome_reserve, reserves.reference)

    new_reserves = Reserves(
        yes=reserves.yes, no=reserves.no, reference=checked_sub(reserves.reference, amount_out)
    ).with_outcome(outcome, checked_sub(outcome_reserve, amount_tokens))

    async with CustodyTransaction(custody) as tx:
        await tx.burn(market.mint_of(outcome), seller, amount_tokens)
        if amount_out > 0:
            await tx.transfer(market.reference_mint, market.pool_account, seller, amount_out)

    new_reserves.apply_to(market)
    ledger.write(market, LedgerEntryType.SELL, seller, outcome, amount_tokens, amount_out, now)

    logger.info(
        "Sold %d %s tokens for %d reference: market=%s seller=%s",
        amount_tokens,
        outcome.value,
        amount_out,
        market.id,
        seller,
    )
    return amount_out
