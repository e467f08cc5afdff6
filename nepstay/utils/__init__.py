"""
Utility helpers shared across layers.
"""

from nepstay.utils.datetime_utils import DateTimeHelper, utcnow
from nepstay.utils.formatters import CurrencyFormatter, round_half_up
from nepstay.utils.slug_utils import SlugHelper, generate_slug, to_base36

__all__ = [
    "DateTimeHelper",
    "utcnow",
    "CurrencyFormatter",
    "round_half_up",
    "SlugHelper",
    "generate_slug",
    "to_base36",
]
