"""
Utility modules for the curation engine.
"""

from .coercion import to_count, to_finite_number, to_int, to_text, to_text_list, unique_texts
from .config import Config
from .formatting import format_area, format_money, bedrooms_label
from .geo import haversine_km

__all__ = [
    "to_count",
    "to_finite_number",
    "to_int",
    "to_text",
    "to_text_list",
    "unique_texts",
    "Config",
    "format_area",
    "format_money",
    "bedrooms_label",
    "haversine_km",
]
