"""
ISO 7064 MOD 97-10 helpers shared by the national check digit algorithms.

All functions work on plain digit strings and stream the remainder one digit
at a time. Invalid input is reported with a sentinel (``-1`` or ``None``)
rather than an exception: a national rule that cannot be evaluated simply
does not hold.
"""
from __future__ import annotations

from typing import Optional

from ..constants import MOD


def _is_numeric(text: Optional[str]) -> bool:
    return bool(text) and all("0" <= ch <= "9" for ch in text)


def mod97_10(numeric: Optional[str]) -> int:
    """Remainder of ``numeric`` mod 97, or -1 for empty/non-numeric input."""
    if not _is_numeric(numeric):
        return -1
    remainder = 0
    for ch in numeric:
        remainder = (remainder * 10 + (ord(ch) - 48)) % MOD
    return remainder


def letters_to_digits(text: Optional[str]) -> Optional[str]:
    """Expand A-Z to 10-35 as the IBAN rearrangement does; None for other characters."""
    if not text:
        return None
    out = []
    for ch in text.upper():
        if "0" <= ch <= "9":
            out.append(ch)
        elif "A" <= ch <= "Z":
            out.append(str(ord(ch) - 55))
        else:
            return None
    return "".join(out)


def mod97_10_check_digits(numeric: Optional[str]) -> Optional[str]:
    """Two digits ``DD`` such that ``mod97_10(numeric + DD) == 1``."""
    remainder = mod97_10(numeric + "00") if _is_numeric(numeric) else -1
    if remainder < 0:
        return None
    return f"{98 - remainder:02d}"


def rib_check_digits(numeric: Optional[str]) -> Optional[str]:
    """RIB key: ``97 - ((numeric * 100) mod 97)`` as two digits."""
    if not _is_numeric(numeric):
        return None
    remainder = mod97_10(numeric + "00")
    return f"{MOD - remainder:02d}"


# French RIB letter transcoding: A-I -> 1-9, J-R -> 1-9, S-Z -> 2-9
_FRENCH_LETTERS = {
    **{ch: i + 1 for i, ch in enumerate("ABCDEFGHI")},
    **{ch: i + 1 for i, ch in enumerate("JKLMNOPQR")},
    **{ch: i + 2 for i, ch in enumerate("STUVWXYZ")},
}


def french_letter_value(ch: str) -> int:
    return _FRENCH_LETTERS.get(ch.upper(), 0)


def french_rib_numeric(text: str) -> str:
    """Replace letters by their RIB digit; other characters are kept."""
    out = []
    for ch in text:
        if ch.isalpha():
            out.append(str(french_letter_value(ch)))
        else:
            out.append(ch)
    return "".join(out)


__all__ = [
    "mod97_10",
    "mod97_10_check_digits",
    "letters_to_digits",
    "rib_check_digits",
    "french_letter_value",
    "french_rib_numeric",
]
