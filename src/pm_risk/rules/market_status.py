from src.pm_common.errors import (
    DeadlineNotPassedError,
    DeadlinePassedError,
    MarketAlreadySettledError,
    MarketNotSettledError,
    MarketSettledError,
    UnauthorizedError,
)
from src.pm_market.domain.models import Market


def check_trading_open(market: Market, now: int) -> None:
    """Buy/sell are legal only while ``now < deadline`` and unsettled."""
    if market.is_settled:
        raise MarketSettledError(market.id)
    if now >= market.deadline:
        raise DeadlinePassedError(market.id)


def check_settlement_allowed(market: Market, caller: str, now: int) -> None:
    if caller != market.authority:
        raise UnauthorizedError(caller)
    if now < market.deadline:
        raise DeadlineNotPassedError(market.id)
    if market.is_settled:
        raise MarketAlreadySettledError(market.id)


def check_settled(market: Market) -> None:
    if not market.is_settled or market.winning_outcome is None:
        raise MarketNotSettledError(market.id)
