import numbers
from decimal import Decimal


def _ensure_number(number) -> None:
    if isinstance(number, bool) or not isinstance(number, (numbers.Real, Decimal)):
        raise TypeError("Input must be a number")


def calculate_square(number):
    _ensure_number(number)
    return number * number


def is_even(number) -> bool:
    _ensure_number(number)
    return number % 2 == 0
