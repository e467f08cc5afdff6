"""
Data formatting utilities
"""

from typing import Optional, Union


class CurrencyFormatter:
    """Currency formatting utilities"""

    NPR_PREFIX = 'Rs.'

    @classmethod
    def format_npr(cls, amount: Optional[Union[int, float]]) -> str:
        """Format a nightly price as ``Rs. 1,200``"""
        if not amount:
            return f"{cls.NPR_PREFIX} 0"

        if float(amount).is_integer():
            return f"{cls.NPR_PREFIX} {int(amount):,}"
        return f"{cls.NPR_PREFIX} {amount:,.2f}".rstrip('0').rstrip('.')


def round_half_up(value: float) -> int:
    """Round half away from zero"""
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)
