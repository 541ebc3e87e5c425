"""
structkit.checksum — Luhn check-digit validation.

The Luhn sum walks the digits right to left, doubling every second digit
(subtracting 9 whenever the doubled value exceeds 9).  A number is valid
when that sum is a multiple of 10.

    is_valid_credit_card("4532 0151 1283 0366")  → True
    is_valid_credit_card("1234567890123456")     → False
"""

import re
from typing import Any

from structkit.constants import CARD_MAX_DIGITS, CARD_MIN_DIGITS

_NON_DIGITS = re.compile(r"\D")


def luhn_total(digits: str) -> int:
    """Luhn sum of a string made only of decimal digits."""
    total = 0
    double = False
    for ch in reversed(digits):
        digit = int(ch)
        if double:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
        double = not double
    return total


def is_valid_credit_card(text: str) -> bool:
    """
    True when `text` holds a Luhn-valid card number.

    Every non-digit character (spaces, dashes) is ignored.  Numbers with
    fewer than 13 or more than 19 digits are rejected.
    """
    cleaned = _NON_DIGITS.sub("", text)
    if not CARD_MIN_DIGITS <= len(cleaned) <= CARD_MAX_DIGITS:
        return False
    return luhn_total(cleaned) % 10 == 0


def is_credit_card(value: Any) -> bool:
    """Predicate form of is_valid_credit_card: non-strings are simply False."""
    if not isinstance(value, str):
        return False
    return is_valid_credit_card(value)
