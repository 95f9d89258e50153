from dataclasses import dataclass

from src.pm_common.enums import LedgerEntryType, Outcome


@dataclass(frozen=True)
class LedgerEntry:
    """One committed market operation.

    amount_in / amount_out by entry type:
      BUY:    reference paid in    / outcome tokens minted
      SELL:   outcome tokens burned / reference paid out
      SETTLE: observed result       / 0
      REDEEM: winning tokens burned / reference paid out
    """

    market_id: str
    entry_type: LedgerEntryType
    holder: str
    outcome: Outcome | None
    amount_in: int
    amount_out: int
    yes_reserve: int     # reserves after the operation
    no_reserve: int
    reference_reserve: int
    timestamp: int
