"""Token validators for configuration lines.

Each predicate takes a single raw token, as split from a config line, and
returns True if the token is acceptable for the corresponding field.
"""

import re

WORD_PATTERN = re.compile(r"[A-Za-z0-9_-]+")
INTEGER_PATTERN = re.compile(r"[0-9]+")
MAC_PATTERN = re.compile(r"[0-9A-Fa-f]{2}(:[0-9A-Fa-f]{2}){5}")


def is_word(token: str) -> bool:
    """Check for a device or driver name (letters, digits, underscores, dashes)."""
    return WORD_PATTERN.fullmatch(token) is not None


def is_integer(token: str) -> bool:
    """Check for a non-negative decimal integer (e.g., 0, 1, 42)."""
    return INTEGER_PATTERN.fullmatch(token) is not None


def is_bool(token: str) -> bool:
    """Check for the literal flags 'true' or 'false'."""
    return token in ("true", "false")


def is_mac(token: str) -> bool:
    """Check for a 6-octet colon-separated MAC address (e.g., 01:23:45:67:89:ab)."""
    return MAC_PATTERN.fullmatch(token) is not None
