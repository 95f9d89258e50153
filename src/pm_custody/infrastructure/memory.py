"""In-memory custody — reference balance keeper for simulations and tests.

Balances are keyed by (token, holder). Each primitive validates first and
mutates only after every check passed, so a failed call leaves balances
unchanged.
"""
from collections import defaultdict

from src.pm_common.errors import (
    CustodyError,
    InsufficientTokenBalanceError,
    InvalidAmountError,
)
from src.pm_common.u64 import U64_MAX, require_u64


class InMemoryCustody:
    def __init__(self) -> None:
        self._balances: dict[tuple[str, str], int] = defaultdict(int)
        self._supply: dict[str, int] = defaultdict(int)

    def fund(self, token: str, holder: str, amount: int) -> None:
        """Credit an external deposit (e.g. airdropped reference currency)."""
        self._check_amount(amount)
        self._credit_supply(token, amount)
        self._balances[(token, holder)] += amount

    async def mint(self, token: str, to: str, amount: int) -> None:
        self._check_amount(amount)
        self._credit_supply(token, amount)
        self._balances[(token, to)] += amount

    async def burn(self, token: str, holder: str, amount: int) -> None:
        self._check_amount(amount)
        self._require_balance(token, holder, amount)
        self._balances[(token, holder)] -= amount
        self._supply[token] -= amount

    async def transfer(self, token: str, source: str, dest: str, amount: int) -> None:
        self._check_amount(amount)
        self._require_balance(token, source, amount)
        if source == dest:
            return
        self._balances[(token, source)] -= amount
        self._balances[(token, dest)] += amount

    async def balance_of(self, token: str, holder: str) -> int:
        return self._balances.get((token, holder), 0)

    async def total_supply(self, token: str) -> int:
        return self._supply.get(token, 0)

    def _check_amount(self, amount: int) -> None:
        try:
            require_u64(amount, "amount")
        except InvalidAmountError as exc:
            raise CustodyError(exc.message) from exc

    def _credit_supply(self, token: str, amount: int) -> None:
        if self._supply[token] + amount > U64_MAX:
            raise CustodyError(f"{token} supply would exceed u64")
        self._supply[token] += amount

    def _require_balance(self, token: str, holder: str, amount: int) -> None:
        available = self._balances.get((token, holder), 0)
        if available < amount:
            raise InsufficientTokenBalanceError(token, holder, amount, available)
