"""Buy — deposit reference currency, receive freshly minted outcome tokens.

Steps:
- Validate phase (unsettled, before deadline) and amount
- Price via quote_mint against the current reserves
- Compute the post-trade reserves (overflow-checked) before touching custody
- Custody: transfer reference buyer -> pool, then mint outcome tokens to buyer
- Commit reserves, write BUY ledger entry

Any failure before the commit leaves the market untouched; a failed mint
after a successful transfer is compensated by CustodyTransaction.
"""
import logging

from src.pm_amm.domain.pricing import quote_mint
from src.pm_clearing.infrastructure.ledger import MarketLedger
from src.pm_common.enums import LedgerEntryType, Outcome
from src.pm_common.u64 import checked_add, require_positive_u64
from src.pm_custody.domain.repository import CustodyProtocol
from src.pm_custody.domain.transaction import CustodyTransaction
from src.pm_market.domain.models import Market, Reserves
from src.pm_risk.rules.market_params import check_outcome
from src.pm_risk.rules.market_status import check_trading_open

logger = logging.getLogger(__name__)


async def execute_buy(
    market: Market,
    buyer: str,
    outcome: Outcome,
    amount_in: int,
    now: int,
    custody: CustodyProtocol,
    ledger: MarketLedger,
) -> int:
    """Returns the number of outcome tokens minted to ``buyer``."""
    check_trading_open(market, now)
    outcome = check_outcome(outcome)
    require_positive_u64(amount_in, "amount_in")

    reserves = Reserves.of(market)
    outcome_reserve = market.reserve_of(outcome)
    amount_out = quote_mint(amount_in, outcome_reserve, reserves.reference)

    new_reserves = Reserves(
        yes=reserves.yes, no=reserves.no, reference=checked_add(reserves.reference, amount_in)
    ).with_outcome(outcome, checked_add(outcome_reserve, amount_out))

    async with CustodyTransaction(custody) as tx:
        await tx.transfer(market.reference_mint, buyer, market.pool_account, amount_in)
        if amount_out > 0:
            await tx.mint(market.mint_of(outcome), buyer, amount_out)

    new_reserves.apply_to(market)
    ledger.write(market, LedgerEntryType.BUY, buyer, outcome, amount_in, amount_out, now)

    logger.info(
        "Bought %d %s tokens for %d reference: market=%s buyer=%s",
        amount_out,
        outcome.value,
        amount_in,
        market.id,
        buyer,
    )
    return amount_out
