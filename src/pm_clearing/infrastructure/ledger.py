"""In-memory append-only ledger of committed market operations.

Written by the clearing functions only after the reserves were committed, so
the ledger never records an aborted operation.
"""
from collections import defaultdict

from src.pm_clearing.domain.models import LedgerEntry
from src.pm_common.enums import LedgerEntryType, Outcome
from src.pm_market.domain.models import Market


class MarketLedger:
    def __init__(self) -> None:
        self._entries: dict[str, list[LedgerEntry]] = defaultdict(list)

    def write(
        self,
        market: Market,
        entry_type: LedgerEntryType,
        holder: str,
        outcome: Outcome | None,
        amount_in: int,
        amount_out: int,
        timestamp: int,
    ) -> LedgerEntry:
        entry = LedgerEntry(
            market_id=market.id,
            entry_type=entry_type,
            holder=holder,
            outcome=outcome,
            amount_in=amount_in,
            amount_out=amount_out,
            yes_reserve=market.yes_reserve,
            no_reserve=market.no_reserve,
            reference_reserve=market.reference_reserve,
            timestamp=timestamp,
        )
        self._entries[market.id].append(entry)
        return entry

    def entries(self, market_id: str) -> list[LedgerEntry]:
        return list(self._entries.get(market_id, ()))

    def net_reference_deposits(self, market_id: str) -> int:
        """Reference deposited via buy minus reference withdrawn via sell/redeem."""
        total = 0
        for e in self._entries.get(market_id, ()):
            if e.entry_type == LedgerEntryType.BUY:
                total += e.amount_in
            elif e.entry_type in (LedgerEntryType.SELL, LedgerEntryType.REDEEM):
                total -= e.amount_out
        return total
