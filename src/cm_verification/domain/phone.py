"""Indian mobile number rules.

Accepted input: optional "+91" / "91" / "0" prefix, separators (space, dash,
dot, parentheses) ignored. Normalized form: 10 digits, first digit 6-9.
"""

import re

from src.cm_common.errors import InvalidFormatError

_SEPARATORS = re.compile(r"[\s\-().]")
_MOBILE = re.compile(r"^[6-9]\d{9}$")


def normalize_mobile_number(raw: str) -> str:
    """Return the 10-digit form or raise InvalidFormatError."""
    number = _SEPARATORS.sub("", raw or "")
    if number.startswith("+91"):
        number = number[3:]
    elif len(number) == 12 and number.startswith("91"):
        number = number[2:]
    elif len(number) == 11 and number.startswith("0"):
        number = number[1:]

    if not _MOBILE.match(number):
        raise InvalidFormatError(
            "Mobile number must be 10 digits starting with 6, 7, 8 or 9"
        )
    return number


def mask_mobile_number(number: str) -> str:
    """98XXXXXX10-style masking for logs and responses."""
    if len(number) < 4:
        return "*" * len(number)
    return f"{number[:2]}{'X' * (len(number) - 4)}{number[-2:]}"
