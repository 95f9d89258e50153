"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Authority
  3xxx: Market lifecycle
  4xxx: Trading / redemption
  6xxx: Custody
  9xxx: Arithmetic
"""


class AppError(Exception):
    """Base application error."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


# --- 1xxx: Authority ---

class UnauthorizedError(AppError):
    def __init__(self, caller: str) -> None:
        super().__init__(
            1001, f"Unauthorized - only market authority can perform this action (caller={caller})"
        )


# --- 3xxx: Market lifecycle ---

class MarketNotFoundError(AppError):
    def __init__(self, market_id: str) -> None:
        super().__init__(3001, f"Market not found: {market_id}")


class MarketAlreadyExistsError(AppError):
    def __init__(self, market_id: str) -> None:
        super().__init__(3002, f"Market already exists: {market_id}")


class InvalidProjectNameError(AppError):
    def __init__(self, length: int, max_length: int) -> None:
        super().__init__(
            3003, f"Project name is {length} bytes, max {max_length} bytes"
        )


class InvalidMintConfigurationError(AppError):
    def __init__(self, detail: str = "Reference, YES and NO mints must be distinct") -> None:
        super().__init__(3004, detail)


class InvalidDeadlineError(AppError):
    def __init__(self, deadline: int, now: int) -> None:
        super().__init__(
            3101, f"Invalid deadline - must be in the future (deadline={deadline}, now={now})"
        )


class MarketSettledError(AppError):
    def __init__(self, market_id: str) -> None:
        super().__init__(3102, f"Market has already been settled: {market_id}")


class DeadlinePassedError(AppError):
    def __init__(self, market_id: str) -> None:
        super().__init__(3103, f"Market deadline has passed: {market_id}")


class DeadlineNotPassedError(AppError):
    def __init__(self, market_id: str) -> None:
        super().__init__(3104, f"Market deadline has not passed yet: {market_id}")


class MarketAlreadySettledError(AppError):
    def __init__(self, market_id: str) -> None:
        super().__init__(3105, f"Market has already been settled: {market_id}")


class MarketNotSettledError(AppError):
    def __init__(self, market_id: str) -> None:
        super().__init__(3106, f"Market has not been settled yet: {market_id}")


# --- 4xxx: Trading / redemption ---

class InsufficientLiquidityError(AppError):
    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            4001,
            f"Insufficient liquidity in the pool: requested {requested}, available {available}",
        )


class WrongTokenTypeError(AppError):
    def __init__(self, token: str) -> None:
        super().__init__(4002, f"Wrong token type for redemption: {token}")


class InvalidAmountError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4003, f"Invalid amount: {detail}")


class InvalidOutcomeError(AppError):
    def __init__(self, outcome: object) -> None:
        super().__init__(4004, f"Invalid outcome: {outcome!r} (expected YES or NO)")


# --- 6xxx: Custody ---

class CustodyError(AppError):
    """Opaque custody failure; the in-progress operation must abort."""

    def __init__(self, detail: str, code: int = 6001) -> None:
        super().__init__(code, f"Custody error: {detail}")


class InsufficientTokenBalanceError(CustodyError):
    def __init__(self, token: str, holder: str, required: int, available: int) -> None:
        super().__init__(
            f"insufficient {token} balance for {holder}: "
            f"required {required}, available {available}",
            code=6002,
        )


class CustodyRollbackFailedError(CustodyError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"compensation failed: {detail}", code=6003)


# --- 9xxx: Arithmetic ---

class ArithmeticOverflowError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9001, f"Math overflow occurred: {detail}")


class DivisionUndefinedError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9002, f"Division by zero: {detail}")
