"""CustodyTransaction — all-or-nothing grouping of custody primitives.

Custody only guarantees atomicity per primitive. Buy, sell and redeem each
issue two primitives, so the transaction records every applied step and, if
a later step raises, applies the inverse of each recorded step in reverse
order before re-raising:

    TRANSFER(a -> b)  undone by  TRANSFER(b -> a)
    MINT(to)          undone by  BURN(to)
    BURN(holder)      undone by  MINT(holder)

Usage:
    async with CustodyTransaction(custody) as tx:
        await tx.transfer(...)
        await tx.mint(...)
"""
import logging
from dataclasses import dataclass
from types import TracebackType

from src.pm_common.enums import CustodyOp
from src.pm_common.errors import CustodyRollbackFailedError
from src.pm_custody.domain.repository import CustodyProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CustodyStep:
    op: CustodyOp
    token: str
    amount: int
    source: str = ""  # BURN holder / TRANSFER source
    dest: str = ""    # MINT recipient / TRANSFER destination


class CustodyTransaction:
    def __init__(self, custody: CustodyProtocol) -> None:
        self._custody = custody
        self._applied: list[CustodyStep] = []

    @property
    def applied(self) -> tuple[CustodyStep, ...]:
        return tuple(self._applied)

    async def mint(self, token: str, to: str, amount: int) -> None:
        await self._custody.mint(token, to, amount)
        self._applied.append(CustodyStep(CustodyOp.MINT, token, amount, dest=to))

    async def burn(self, token: str, holder: str, amount: int) -> None:
        await self._custody.burn(token, holder, amount)
        self._applied.append(CustodyStep(CustodyOp.BURN, token, amount, source=holder))

    async def transfer(self, token: str, source: str, dest: str, amount: int) -> None:
        await self._custody.transfer(token, source, dest, amount)
        self._applied.append(
            CustodyStep(CustodyOp.TRANSFER, token, amount, source=source, dest=dest)
        )

    async def rollback(self) -> None:
        while self._applied:
            step = self._applied.pop()
            try:
                await self._compensate(step)
            except Exception as exc:
                logger.critical("Custody compensation failed: step=%s error=%s", step, exc)
                raise CustodyRollbackFailedError(f"{step.op.value} {step.token}") from exc

    async def _compensate(self, step: CustodyStep) -> None:
        if step.op == CustodyOp.MINT:
            await self._custody.burn(step.token, step.dest, step.amount)
        elif step.op == CustodyOp.BURN:
            await self._custody.mint(step.token, step.source, step.amount)
        else:
            await self._custody.transfer(step.token, step.dest, step.source, step.amount)

    async def __aenter__(self) -> "CustodyTransaction":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc is None:
            return
        if self._applied:
            logger.warning(
                "Custody step failed, compensating %d applied step(s): %s",
                len(self._applied),
                exc,
            )
            await self.rollback()
