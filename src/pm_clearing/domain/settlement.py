"""Market settlement — one-way OPEN -> SETTLED transition.

The observed result is taken on trust from the authority; the market only
compares it with the stored fundraising goal. Reserves are not touched.
"""
import logging

from src.pm_clearing.infrastructure.ledger import MarketLedger
from src.pm_common.enums import LedgerEntryType, Outcome
from src.pm_common.u64 import require_u64
from src.pm_market.domain.models import Market
from src.pm_risk.rules.market_status import check_settlement_allowed

logger = logging.getLogger(__name__)


def resolve_outcome(observed_result: int, fundraising_goal: int) -> Outcome:
    """YES when the goal was met or exceeded."""
    return Outcome.YES if observed_result >= fundraising_goal else Outcome.NO


def settle_market(
    market: Market,
    caller: str,
    observed_result: int,
    now: int,
    ledger: MarketLedger,
) -> Outcome:
    check_settlement_allowed(market, caller, now)
    require_u64(observed_result, "observed_result")

    winner = resolve_outcome(observed_result, market.fundraising_goal)
    market.winning_outcome = winner
    market.settled_at = now
    market.is_settled = True
    ledger.write(market, LedgerEntryType.SETTLE, caller, winner, observed_result, 0, now)

    logger.info(
        "Market settled: %s | goal=%d result=%d winner=%s",
        market.project_name,
        market.fundraising_goal,
        observed_result,
        winner.value,
    )
    return winner
