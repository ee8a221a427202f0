"""Identifier formats used in block attributes.

The formats are opaque strings expected by the target editors; only their
shape matters.
"""

from __future__ import annotations

import hashlib
import time
import uuid

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def generate_unique_id() -> str:
    """Generate a random UUID4 string."""
    return str(uuid.uuid4())


def short_id(length: int = 8) -> str:
    """Generate a random lowercase hex string of the given length."""
    return uuid.uuid4().hex[:length]


def to_base36(number: int) -> str:
    """Render a non-negative integer in base 36."""
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def timestamp_millis() -> int:
    """Current time in milliseconds."""
    return int(time.time() * 1000)


def base36_timestamp() -> str:
    """Current time in milliseconds, base 36."""
    return to_base36(timestamp_millis())


def md5_hex(value: str) -> str:
    """Hex MD5 digest of a string."""
    return hashlib.md5(value.encode()).hexdigest()
