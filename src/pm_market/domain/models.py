"""Domain models for pm_market — pure dataclasses, no business logic."""

from dataclasses import dataclass

from src.pm_common.enums import MarketStatus, Outcome


@dataclass
class Market:
    id: str
    authority: str
    reference_mint: str
    yes_mint: str
    no_mint: str
    pool_account: str            # custody holder of escrowed reference currency
    fundraising_goal: int        # u64
    deadline: int                # i64 unix seconds, trading allowed strictly before
    project_name: str
    created_at: int
    yes_reserve: int = 0         # AMM depth AND circulating YES supply
    no_reserve: int = 0          # AMM depth AND circulating NO supply
    reference_reserve: int = 0   # escrowed reference currency
    is_settled: bool = False
    winning_outcome: Outcome | None = None
    settled_at: int | None = None

    @property
    def status(self) -> MarketStatus:
        return MarketStatus.SETTLED if self.is_settled else MarketStatus.OPEN

    def reserve_of(self, outcome: Outcome) -> int:
        return self.yes_reserve if outcome == Outcome.YES else self.no_reserve

    def mint_of(self, outcome: Outcome) -> str:
        return self.yes_mint if outcome == Outcome.YES else self.no_mint


@dataclass(frozen=True)
class Reserves:
    """Reserve triple computed ahead of a commit."""

    yes: int
    no: int
    reference: int

    @classmethod
    def of(cls, market: Market) -> "Reserves":
        return cls(market.yes_reserve, market.no_reserve, market.reference_reserve)

    def with_outcome(self, outcome: Outcome, value: int) -> "Reserves":
        if outcome == Outcome.YES:
            return Reserves(value, self.no, self.reference)
        return Reserves(self.yes, value, self.reference)

    def apply_to(self, market: Market) -> None:
        market.yes_reserve = self.yes
        market.no_reserve = self.no
        market.reference_reserve = self.reference
