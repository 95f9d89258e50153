"""Global enums."""

from enum import Enum


class Outcome(str, Enum):
    YES = "YES"
    NO = "NO"


class MarketStatus(str, Enum):
    OPEN = "OPEN"
    SETTLED = "SETTLED"


class LedgerEntryType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    SETTLE = "SETTLE"
    REDEEM = "REDEEM"


class CustodyOp(str, Enum):
    """Custody primitive recorded by a CustodyTransaction for compensation."""
    MINT = "MINT"
    BURN = "BURN"
    TRANSFER = "TRANSFER"
