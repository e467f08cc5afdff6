"""
Slug generation utilities for hostel listings
"""

import re
import threading
import time

BASE36_ALPHABET = '0123456789abcdefghijklmnopqrstuvwxyz'


def to_base36(number: int) -> str:
    """Encode a non-negative integer in lowercase base 36"""
    if number < 0:
        raise ValueError("number must be non-negative")
    if number == 0:
        return '0'

    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return ''.join(reversed(digits))


class SlugHelper:
    """Main slug generation utilities"""

    FALLBACK = 'hostel'

    _lock = threading.Lock()
    _last_stamp = 0

    @staticmethod
    def slugify(text: str) -> str:
        """Create the name part of a slug"""
        if not text:
            return ''

        text = text.lower()

        # Keep ASCII letters, digits, whitespace and hyphens only
        text = re.sub(r'[^\w\s-]', '', text, flags=re.ASCII)

        # Collapse whitespace, underscores and hyphens into single hyphens
        text = re.sub(r'[\s_-]+', '-', text, flags=re.ASCII)

        return text.strip('-')

    @classmethod
    def timestamp_suffix(cls) -> str:
        """
        Millisecond timestamp in base 36, strictly increasing within the
        process so two calls in the same millisecond still differ.
        """
        with cls._lock:
            stamp = max(int(time.time() * 1000), cls._last_stamp + 1)
            cls._last_stamp = stamp
        return to_base36(stamp)

    @classmethod
    def generate(cls, name: str) -> str:
        """Slug for a new hostel: slugified name plus a timestamp suffix"""
        base = cls.slugify(name) or cls.FALLBACK
        return f"{base}-{cls.timestamp_suffix()}"


def generate_slug(name: str) -> str:
    return SlugHelper.generate(name)
