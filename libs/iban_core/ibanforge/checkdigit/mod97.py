"""
IBAN check digits (ISO 13616, MOD 97-10).

The remainder is computed by streaming over the rearranged identifier
(BBAN + country code + check digits) so that no big integer is ever built.
Letters contribute two decimal digits (A=10 .. Z=35), digits one.
"""
from __future__ import annotations

from ..constants import (
    BBAN_INDEX,
    COUNTRY_CODE_LENGTH,
    DEFAULT_CHECK_DIGIT,
    MAX_RUNNING_TOTAL,
    MOD,
)
from ..errors import FormatViolation, IbanFormatError, InvalidCheckDigitError


def _numeric_value(ch: str) -> int:
    if "0" <= ch <= "9":
        return ord(ch) - 48
    if "A" <= ch <= "Z":
        return ord(ch) - 55
    if "a" <= ch <= "z":
        return ord(ch) - 87
    return -1


def calculate_mod(text: str) -> int:
    """Remainder mod 97 of ``text`` read as an IBAN numeric string."""
    total = 0
    for i, ch in enumerate(text):
        value = _numeric_value(ch)
        if value < 0:
            raise IbanFormatError(
                FormatViolation.IBAN_INVALID_CHARACTER,
                f"Invalid Character[{i}] = '{ch}'",
                actual=i,
                invalid_character=ch,
            )
        total = (total * 100 if value > 9 else total * 10) + value
        if total > MAX_RUNNING_TOTAL:
            total %= MOD
    return total % MOD


def _format_check_digit(remainder: int) -> str:
    return f"{98 - remainder:02d}"


def calculate_check_digit(country_code, bban: str) -> str:
    """Two-digit IBAN check digit for ``bban`` in ``country_code``."""
    cc = str(country_code)
    return _format_check_digit(calculate_mod(bban + cc + DEFAULT_CHECK_DIGIT))


def calculate_check_digit_for_iban(iban: str) -> str:
    """Check digit for a full IBAN string; its current check digits are ignored."""
    return calculate_check_digit(iban[:COUNTRY_CODE_LENGTH], iban[BBAN_INDEX:])


def validate_check_digit(iban: str) -> None:
    actual = iban[COUNTRY_CODE_LENGTH:BBAN_INDEX]
    expected = calculate_check_digit_for_iban(iban)
    if actual != expected:
        raise InvalidCheckDigitError(
            actual,
            expected,
            f"[{iban}] has invalid check digit: {actual}, expected check digit is: {expected}",
        )


__all__ = [
    "calculate_mod",
    "calculate_check_digit",
    "calculate_check_digit_for_iban",
    "validate_check_digit",
]
