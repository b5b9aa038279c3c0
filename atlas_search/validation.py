"""Argument guards shared by the builders.

Each guard returns the value it checked so constructors can validate and
assign in one expression.
"""

from datetime import datetime
from numbers import Real
from typing import Any, TypeVar

from atlas_search.exceptions import ArgumentOutOfRangeError, InvalidArgumentError

T = TypeVar("T")


def not_none(value: T | None, name: str) -> T:
    if value is None:
        raise InvalidArgumentError(name, value, "must not be None")
    return value


def is_number(value: Any) -> bool:
    """True for int, float and bson.Int64 values; bools are not numbers here."""
    return isinstance(value, Real) and not isinstance(value, bool)


def is_date(value: Any) -> bool:
    return isinstance(value, datetime)


def number(value: Any, name: str) -> Any:
    if not is_number(value):
        raise InvalidArgumentError(name, value, f"expected a number, got {type(value).__name__}")
    return value


def integer(value: Any, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidArgumentError(name, value, f"expected an int, got {type(value).__name__}")
    return value


def greater_than_zero(value: Any, name: str) -> Any:
    number(value, name)
    if value <= 0:
        raise ArgumentOutOfRangeError(name, value, f"value is not greater than zero: {value}")
    return value


def zero_or_greater(value: Any, name: str) -> Any:
    number(value, name)
    if value < 0:
        raise ArgumentOutOfRangeError(name, value, f"value is less than zero: {value}")
    return value


def between(value: Any, low: Any, high: Any, name: str) -> Any:
    """Inclusive range check."""
    number(value, name)
    if not low <= value <= high:
        raise ArgumentOutOfRangeError(
            name, value, f"value is not between {low} and {high}: {value}"
        )
    return value


def optional(value: T | None, check, *args: Any) -> T | None:
    """Apply ``check`` only when a value was given."""
    if value is None:
        return None
    return check(value, *args)


def non_empty_string(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise InvalidArgumentError(name, value, f"expected a string, got {type(value).__name__}")
    if not value:
        raise InvalidArgumentError(name, value, "must not be empty")
    return value


def instance_of(value: Any, kind: type[T] | tuple[type, ...], name: str) -> T:
    not_none(value, name)
    if not isinstance(value, kind):
        expected = (
            " or ".join(k.__name__ for k in kind) if isinstance(kind, tuple) else kind.__name__
        )
        raise InvalidArgumentError(
            name, value, f"expected {expected}, got {type(value).__name__}"
        )
    return value
