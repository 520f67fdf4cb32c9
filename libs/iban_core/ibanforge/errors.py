"""
Error types raised while parsing, validating and building IBANs.

Every failure surfaced by the library is an ``IbanError``. Format problems
carry the violated rule plus the actual/expected values, check digit
mismatches carry both digit pairs, and unknown countries get their own type
so callers can tell "garbage input" apart from "country we do not know".
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class FormatViolation(str, Enum):
    """Which format rule an identifier broke."""
    UNKNOWN = "unknown"

    IBAN_NOT_NULL = "iban_not_null"
    IBAN_NOT_EMPTY = "iban_not_empty"
    IBAN_FORMATTING = "iban_formatting"
    IBAN_INVALID_CHARACTER = "iban_invalid_character"

    COUNTRY_CODE_TWO_LETTERS = "country_code_two_letters"
    COUNTRY_CODE_UPPER_CASE_LETTERS = "country_code_upper_case_letters"
    COUNTRY_CODE_EXISTS = "country_code_exists"
    COUNTRY_CODE_NOT_NULL = "country_code_not_null"

    CHECK_DIGIT_TWO_DIGITS = "check_digit_two_digits"
    CHECK_DIGIT_ONLY_DIGITS = "check_digit_only_digits"

    BBAN_LENGTH = "bban_length"
    BBAN_ONLY_DIGITS = "bban_only_digits"
    BBAN_ONLY_UPPER_CASE_LETTERS = "bban_only_upper_case_letters"
    BBAN_ONLY_DIGITS_OR_LETTERS = "bban_only_digits_or_letters"
    BBAN_INVALID_ENTRY_TYPE = "bban_invalid_entry_type"

    BANK_CODE_NOT_NULL = "bank_code_not_null"
    ACCOUNT_NUMBER_NOT_NULL = "account_number_not_null"

    STRUCTURE_FORMAT = "structure_format"

    CREDITOR_ID_LENGTH = "creditor_id_length"
    CREDITOR_ID_VALID_CHARACTERS = "creditor_id_valid_characters"
    BUSINESS_CODE_NOT_NULL = "business_code_not_null"
    NATIONAL_IDENTIFIER_NOT_NULL = "national_identifier_not_null"


class IbanError(Exception):
    """Base class for all ibanforge errors."""

    kind = "iban_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class IbanFormatError(IbanError):
    kind = "format"

    def __init__(
        self,
        violation: FormatViolation,
        message: str,
        actual: Any = None,
        expected: Any = None,
        entry_type: Any = None,
        invalid_character: Optional[str] = None,
    ):
        super().__init__(message)
        self.violation = violation
        self.actual = actual
        self.expected = expected
        self.entry_type = entry_type
        self.invalid_character = invalid_character


class CreditorIdentifierFormatError(IbanFormatError):
    """Format problem in a SEPA creditor identifier."""

    kind = "creditor_identifier_format"


class InvalidCheckDigitError(IbanError):
    """MOD-97 check digit mismatch."""

    kind = "check_digit"

    def __init__(self, actual: str, expected: str, message: Optional[str] = None):
        super().__init__(message or f"invalid check digit: {actual}, expected check digit is: {expected}")
        self.actual = actual
        self.expected = expected


class InvalidNationalCheckDigitError(IbanError):
    kind = "national_check_digit"

    def __init__(self, actual: Optional[str], expected: Optional[str], country: Any, message: Optional[str] = None):
        super().__init__(
            message
            or f"National check digit validation failed for country {country}. "
            f"Expected: {expected}, Actual: {actual}"
        )
        self.actual = actual
        self.expected = expected
        self.country = country


class UnsupportedCountryError(IbanError):
    kind = "unsupported_country"

    def __init__(self, country_code: Optional[str], message: Optional[str] = None):
        super().__init__(message or f"Country code [{country_code}] is not supported.")
        self.country_code = country_code


__all__ = [
    "FormatViolation",
    "IbanError",
    "IbanFormatError",
    "CreditorIdentifierFormatError",
    "InvalidCheckDigitError",
    "InvalidNationalCheckDigitError",
    "UnsupportedCountryError",
]
