"""Market invariant verification after each committed operation."""

import logging

from src.pm_clearing.infrastructure.ledger import MarketLedger
from src.pm_custody.domain.repository import CustodyProtocol
from src.pm_market.domain.models import Market

logger = logging.getLogger(__name__)


async def verify_market_invariants(
    market: Market, ledger: MarketLedger, custody: CustodyProtocol
) -> None:
    """Verify critical market invariants. Raises AssertionError if violated.

    INV-1: reference_reserve == net reference deposits recorded in the ledger
    INV-2: yes_reserve / no_reserve == custody supply of the YES / NO mint
    INV-3: pool custody balance == reference_reserve
    INV-4: is_settled implies winning_outcome is set (and vice versa)
    """
    reserve = market.reference_reserve
    net_deposits = ledger.net_reference_deposits(market.id)
    assert reserve == net_deposits, (
        f"INV-1 violated: reference_reserve={reserve} != net_deposits={net_deposits}"
    )

    yes_supply = await custody.total_supply(market.yes_mint)
    no_supply = await custody.total_supply(market.no_mint)
    assert market.yes_reserve == yes_supply, (
        f"INV-2 violated: yes_reserve={market.yes_reserve} != yes_supply={yes_supply}"
    )
    assert market.no_reserve == no_supply, (
        f"INV-2 violated: no_reserve={market.no_reserve} != no_supply={no_supply}"
    )

    pool_balance = await custody.balance_of(market.reference_mint, market.pool_account)
    assert pool_balance == reserve, (
        f"INV-3 violated: pool_balance={pool_balance} != reference_reserve={reserve}"
    )

    assert market.is_settled == (market.winning_outcome is not None), (
        f"INV-4 violated: is_settled={market.is_settled} "
        f"winning_outcome={market.winning_outcome}"
    )

    logger.debug(
        "Invariants OK: market=%s, yes=%d, no=%d, reference=%d",
        market.id,
        market.yes_reserve,
        market.no_reserve,
        reserve,
    )
