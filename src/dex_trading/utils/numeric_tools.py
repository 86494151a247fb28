from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import TypeAlias

# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float

# Text a user may type into an amount/price field: "12", "12.", ".5", "12.5"
NUMERIC_INPUT_PATTERN = re.compile(r"^([0-9]+\.?|[0-9]*\.[0-9]+)$")

DISPLAY_QUANTUM = Decimal("0.0001")


def as_decimal(value: DecimalLike) -> Decimal:
    """Converts input to `Decimal` safely.

    Ensures floats are converted via string to avoid precision noise.

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal`.
    """
    if isinstance(value, Decimal):
        return value

    return Decimal(str(value))


def is_numeric_input(text: str) -> bool:
    """Return True if $text is empty or looks like a non-negative decimal number."""
    return text == "" or NUMERIC_INPUT_PATTERN.match(text) is not None


def parse_decimal_input(value: DecimalLike | None) -> Decimal | None:
    """Parse raw form input into a finite `Decimal`.

    Returns None for anything that is not a number: None, empty or blank strings,
    text that `Decimal` rejects, booleans, NaN and infinities.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None

    try:
        result = as_decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return None

    if not result.is_finite():
        return None
    return result


def count_fraction_digits(value: Decimal) -> int:
    """Return the number of significant fractional digits of $value.

    Trailing zeros are not significant, so `1.230` has 2 fractional digits and `100` has 0.
    """
    # Raise: only finite decimals have a digit count
    if not value.is_finite():
        raise ValueError(f"Cannot call `count_fraction_digits` because $value ('{value}') is not finite")

    if value == 0:
        return 0
    exponent = value.normalize().as_tuple().exponent
    return max(0, -exponent)


def round_for_display(value: Decimal, quantum: Decimal = DISPLAY_QUANTUM) -> Decimal:
    """Round $value half-up to $quantum for presentation only."""
    return value.quantize(quantum, rounding=ROUND_HALF_UP)
