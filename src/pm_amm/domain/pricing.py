"""Constant-product pricing for a single outcome side of a binary market.

Each outcome reserve is both the AMM depth of that side and the circulating
supply of its position token. Buying mints new tokens, so a buy *increases*
the outcome reserve; selling burns them and decreases it. The formulas below
keep that conflation as-is.

All divisions truncate; the pool keeps the remainder, so a buy followed by a
sell of the received tokens never returns more than was paid in.
"""

from src.pm_common.errors import InsufficientLiquidityError
from src.pm_common.u64 import checked_add, checked_floor_div, checked_mul

BPS_DENOMINATOR = 10_000


def quote_mint(amount_in: int, outcome_reserve: int, reference_reserve: int) -> int:
    """Tokens minted for ``amount_in`` reference units.

    Virgin side bootstraps 1:1, otherwise
    ``floor(amount_in * outcome_reserve / (reference_reserve + amount_in))``.
    """
    if outcome_reserve == 0:
        return amount_in
    numerator = checked_mul(amount_in, outcome_reserve)
    denominator = checked_add(reference_reserve, amount_in)
    return checked_floor_div(numerator, denominator)


def quote_burn(amount_in: int, outcome_reserve: int, reference_reserve: int) -> int:
    """Reference units paid out for burning ``amount_in`` outcome tokens.

    ``floor(amount_in * reference_reserve / (outcome_reserve + amount_in))``,
    or 0 when the reference reserve is empty.
    """
    if amount_in > outcome_reserve:
        raise InsufficientLiquidityError(amount_in, outcome_reserve)
    if reference_reserve == 0:
        return 0
    numerator = checked_mul(amount_in, reference_reserve)
    denominator = checked_add(outcome_reserve, amount_in)
    return checked_floor_div(numerator, denominator)


def implied_yes_probability_bps(yes_reserve: int, no_reserve: int) -> int | None:
    """YES share of outstanding position supply, in basis points.

    None when neither side has been traded yet.
    """
    total = yes_reserve + no_reserve
    if total == 0:
        return None
    return yes_reserve * BPS_DENOMINATOR // total
