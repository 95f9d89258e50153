"""Checked fixed-width integer arithmetic.

Reserves and amounts are unsigned 64-bit quantities; timestamps are signed
64-bit. Python ints never overflow, so every operation here checks the result
against the width explicitly and raises instead of wrapping. No float, no
Decimal.
"""

from src.pm_common.errors import (
    ArithmeticOverflowError,
    DivisionUndefinedError,
    InvalidAmountError,
)

U64_MAX = (1 << 64) - 1
I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1


def is_u64(value: int) -> bool:
    return 0 <= value <= U64_MAX


def is_i64(value: int) -> bool:
    return I64_MIN <= value <= I64_MAX


def require_u64(value: int, name: str) -> int:
    """Raise InvalidAmountError if value is not an int in [0, U64_MAX]."""
    if isinstance(value, bool) or not isinstance(value, int) or not is_u64(value):
        raise InvalidAmountError(f"{name}={value!r} is not a u64")
    return value


def require_positive_u64(value: int, name: str) -> int:
    require_u64(value, name)
    if value == 0:
        raise InvalidAmountError(f"{name} must be greater than zero")
    return value


def checked_add(a: int, b: int) -> int:
    result = a + b
    if not is_u64(result):
        raise ArithmeticOverflowError(f"{a} + {b}")
    return result


def checked_sub(a: int, b: int) -> int:
    result = a - b
    if not is_u64(result):
        raise ArithmeticOverflowError(f"{a} - {b}")
    return result


def checked_mul(a: int, b: int) -> int:
    result = a * b
    if not is_u64(result):
        raise ArithmeticOverflowError(f"{a} * {b}")
    return result


def checked_floor_div(a: int, b: int) -> int:
    """Truncating division; operands are non-negative so this is floor."""
    if b == 0:
        raise DivisionUndefinedError(f"{a} / 0")
    return a // b
