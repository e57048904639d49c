"""
Text normalization helpers shared by the scoring modules.
"""
import math
from numbers import Real
from typing import List

from app.utils.exceptions import InvalidInputError


def ensure_text(value, argument: str) -> str:
    """
    Fail fast when a text argument is not a string.

    Empty strings are valid input and are returned unchanged.

    Raises:
        InvalidInputError: If value is None or not a str
    """
    if not isinstance(value, str):
        raise InvalidInputError(
            f"'{argument}' must be a string, got {type(value).__name__}"
        )
    return value


def ensure_number(value, argument: str) -> float:
    """
    Fail fast when a score argument is not a real number.

    Booleans are rejected even though they subclass int.

    Raises:
        InvalidInputError: If value is not an int or float
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(
            f"'{argument}' must be a number, got {type(value).__name__}"
        )
    if isinstance(value, float) and math.isnan(value):
        raise InvalidInputError(f"'{argument}' must not be NaN")
    return value


def ensure_scores(values, argument: str) -> List[float]:
    """
    Fail fast when a score history is not a sequence of numbers.

    Raises:
        InvalidInputError: If values is not a list/tuple or holds a non-number
    """
    if not isinstance(values, (list, tuple)):
        raise InvalidInputError(
            f"'{argument}' must be a list of numbers, got {type(values).__name__}"
        )
    return [ensure_number(value, argument) for value in values]


def split_words(text: str) -> List[str]:
    """Lowercase text and split it on runs of whitespace."""
    return text.lower().split()


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))
