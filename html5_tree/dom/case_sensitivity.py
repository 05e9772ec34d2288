"""
Case-sensitivity policies used when matching selectors against attributes.
"""

import string
from enum import Enum

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def ascii_lower(value: str) -> str:
    """Lowercase ASCII letters only, leaving other characters untouched."""
    return value.translate(_ASCII_LOWER)


class CaseSensitivity(Enum):
    """How attribute values are compared by selector matching."""
    CASE_SENSITIVE = "case-sensitive"
    ASCII_CASE_INSENSITIVE = "ascii-case-insensitive"

    def eq(self, a: str, b: str) -> bool:
        """
        Compare two strings under this policy.

        Args:
            a: First string
            b: Second string

        Returns:
            True if the strings are equal under this policy
        """
        if self is CaseSensitivity.CASE_SENSITIVE:
            return a == b
        return len(a) == len(b) and ascii_lower(a) == ascii_lower(b)
