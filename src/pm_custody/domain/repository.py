# src/pm_custody/domain/repository.py
"""Custody Protocol — dependency inversion for the balance keeper.

The market never holds balances itself. It instructs a custody collaborator
to mint, burn and transfer. Each primitive either fully succeeds or raises
CustodyError with balances unchanged.
"""

from typing import Protocol


class CustodyProtocol(Protocol):
    async def mint(self, token: str, to: str, amount: int) -> None: ...

    async def burn(self, token: str, holder: str, amount: int) -> None: ...

    async def transfer(self, token: str, source: str, dest: str, amount: int) -> None: ...

    async def balance_of(self, token: str, holder: str) -> int: ...

    async def total_supply(self, token: str) -> int: ...
