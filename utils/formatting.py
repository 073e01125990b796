"""
Formatting utilities for ru-RU catalog display strings.
"""

import math
from typing import Any

from .coercion import to_finite_number

# ru-RU digit grouping uses a non-breaking space
GROUP_SEPARATOR = "\u00a0"

PRICE_ON_REQUEST = "Цена по запросу"
ON_REQUEST = "По запросу"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def group_digits(amount: int) -> str:
    """Format an integer with ru-RU thousands grouping."""
    return f"{amount:,}".replace(",", GROUP_SEPARATOR)


def format_money(value: Any) -> str:
    """
    Format a rouble amount.

    Args:
        value: Number or numeric string.

    Returns:
        "5 000 000 ₽", or "Цена по запросу" for missing/non-positive values.
    """
    number = to_finite_number(value)
    if number is None or number <= 0:
        return PRICE_ON_REQUEST
    return f"{group_digits(_round_half_up(number))} ₽"


def format_area(value: Any) -> str:
    """
    Format a minimum area in square metres.

    Returns:
        "от 35 м²", or "По запросу" for missing/non-positive values.
    """
    number = to_finite_number(value)
    if number is None or number <= 0:
        return ON_REQUEST
    return f"от {group_digits(_round_half_up(number))} м²"


def format_distance_km(value: float) -> str:
    """Format a distance with one decimal and a comma separator: "3,4 км"."""
    return f"{value:.1f}".replace(".", ",") + " км"


def bedrooms_label(value: float) -> str:
    """Human label for a bedroom count."""
    if value <= 0:
        return "Студия"
    if not float(value).is_integer():
        # fractional counts take the genitive singular: "1,5 спальни"
        return f"{value:g}".replace(".", ",") + " спальни"
    count = int(value)
    if count == 1:
        return "1 спальня"
    if 2 <= count <= 4:
        return f"{count} спальни"
    return f"{count} спален"
