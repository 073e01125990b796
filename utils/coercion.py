"""
Coercion helpers for feed-sourced values.

Feed records arrive with locale-formatted numbers ("5 500 000", "42,5"),
escaped unicode artifacts ("\\u0426\\u0435\\u043d\\u0442\\u0440") and
inconsistent list fields. These helpers turn such values into clean Python
values or None, never raising.
"""

import math
import re
from typing import Any, Iterable, List, Optional

_UNICODE_ESCAPE_RE = re.compile(r"\\u([0-9a-fA-F]{4})")
_WHITESPACE_RE = re.compile(r"\s+")


def to_finite_number(value: Any) -> Optional[float]:
    """
    Coerce a value to a finite number.

    Accepts native ints/floats and strings. Strings have all whitespace
    removed and the first comma treated as a decimal separator.

    Returns:
        The number (int or float as given/parsed), or None if not finite.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return value if math.isfinite(value) else None
        except OverflowError:
            # ints beyond float range
            return None
    if isinstance(value, str):
        normalised = _WHITESPACE_RE.sub("", value).replace(",", ".", 1)
        if not normalised or "_" in normalised:
            return None
        try:
            parsed = float(normalised)
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def to_int(value: Any) -> Optional[int]:
    """Coerce to an int when the value is a finite whole number."""
    number = to_finite_number(value)
    if number is None:
        return None
    if float(number).is_integer():
        return int(number)
    return None


def to_count(value: Any) -> Optional[float]:
    """Finite count, as an int when whole (2.0 -> 2) and kept as given otherwise."""
    number = to_finite_number(value)
    if number is None:
        return None
    if float(number).is_integer():
        return int(number)
    return number


def to_text(value: Any) -> Optional[str]:
    """
    Sanitise a text value.

    Trims whitespace and unescapes literal \\uXXXX sequences left behind by
    feed exporters. Non-strings and blank strings become None.
    """
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    if not trimmed:
        return None
    return _UNICODE_ESCAPE_RE.sub(lambda m: chr(int(m.group(1), 16)), trimmed)


def to_text_list(value: Any) -> List[str]:
    """Coerce a list-ish value to a list of sanitised, non-empty strings."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    result = []
    for item in value:
        text = to_text(item)
        if text:
            result.append(text)
    return result


def unique_texts(items: Iterable[Any], limit: Optional[int] = None) -> List[str]:
    """
    Trim, drop empties and drop case-insensitive duplicates.

    The first occurrence wins and keeps its original casing.

    Args:
        items: Ordered strings (non-strings are skipped)
        limit: Optional cap on the result length
    """
    seen = set()
    result = []
    for item in items:
        if not isinstance(item, str):
            continue
        text = item.strip()
        if not text:
            continue
        key = text.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(text)
    if limit is not None:
        return result[:limit]
    return result


def safe_list(value: Any) -> list:
    """Return the value if it is a list, otherwise an empty list."""
    return list(value) if isinstance(value, (list, tuple)) else []


def safe_mapping(value: Any) -> dict:
    """Return the value if it is a mapping, otherwise an empty dict."""
    return dict(value) if isinstance(value, dict) else {}
