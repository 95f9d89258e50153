from config.settings import settings
from src.pm_common.enums import Outcome
from src.pm_common.errors import (
    InvalidDeadlineError,
    InvalidMintConfigurationError,
    InvalidOutcomeError,
    InvalidProjectNameError,
)
from src.pm_common.u64 import is_i64, require_u64


def check_market_params(
    reference_mint: str,
    yes_mint: str,
    no_mint: str,
    fundraising_goal: int,
    deadline: int,
    project_name: str,
    now: int,
) -> None:
    """Validate initialize arguments. Raises before anything is created."""
    name_bytes = len(project_name.encode("utf-8"))
    if name_bytes > settings.PROJECT_NAME_MAX_BYTES:
        raise InvalidProjectNameError(name_bytes, settings.PROJECT_NAME_MAX_BYTES)
    if len({reference_mint, yes_mint, no_mint}) != 3:
        raise InvalidMintConfigurationError()
    require_u64(fundraising_goal, "fundraising_goal")
    if isinstance(deadline, bool) or not isinstance(deadline, int) or not is_i64(deadline):
        raise InvalidDeadlineError(deadline, now)
    if deadline <= now:
        raise InvalidDeadlineError(deadline, now)


def check_outcome(outcome: object) -> Outcome:
    """Coerce a caller-supplied outcome ("YES"/"NO" or an Outcome member)."""
    try:
        return Outcome(outcome)
    except ValueError:
        raise InvalidOutcomeError(outcome) from None
