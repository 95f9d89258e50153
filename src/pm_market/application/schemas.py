"""Pydantic read-side schemas for pm_market.

Snapshots are detached copies; mutating them never touches the live market.
"""

from pydantic import BaseModel, ConfigDict

from src.pm_amm.domain.pricing import implied_yes_probability_bps
from src.pm_common.enums import MarketStatus, Outcome
from src.pm_market.domain.models import Market


class MarketDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    authority: str
    reference_mint: str
    yes_mint: str
    no_mint: str
    pool_account: str
    project_name: str
    fundraising_goal: int
    deadline: int
    status: MarketStatus
    yes_reserve: int
    no_reserve: int
    reference_reserve: int
    is_settled: bool
    winning_outcome: Outcome | None
    yes_probability_bps: int | None
    created_at: int
    settled_at: int | None

    @classmethod
    def from_domain(cls, m: Market) -> "MarketDetail":
        return cls(
            id=m.id,
            authority=m.authority,
            reference_mint=m.reference_mint,
            yes_mint=m.yes_mint,
            no_mint=m.no_mint,
            pool_account=m.pool_account,
            project_name=m.project_name,
            fundraising_goal=m.fundraising_goal,
            deadline=m.deadline,
            status=m.status,
            yes_reserve=m.yes_reserve,
            no_reserve=m.no_reserve,
            reference_reserve=m.reference_reserve,
            is_settled=m.is_settled,
            winning_outcome=m.winning_outcome,
            yes_probability_bps=implied_yes_probability_bps(m.yes_reserve, m.no_reserve),
            created_at=m.created_at,
            settled_at=m.settled_at,
        )


class QuoteResponse(BaseModel):
    """Preview of a trade against current reserves; nothing is executed."""

    market_id: str
    outcome: Outcome
    amount_in: int
    amount_out: int
