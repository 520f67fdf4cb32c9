"""
SEPA creditor identifiers (``DE98ZZZ09999999999``).

Layout: country code, two check digits, a three character creditor business
code, then the national identifier. The check digits are MOD 97-10 over the
national identifier followed by the country code and ``00``; the business
code is not part of the calculation.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from .checkdigit.mod97 import calculate_mod
from .constants import (
    BBAN_INDEX,
    BUSINESS_CODE_INDEX,
    CHECK_DIGIT_INDEX,
    CHECK_DIGIT_LENGTH,
    COUNTRY_CODE_INDEX,
    COUNTRY_CODE_LENGTH,
    CREDITOR_ID_MAX_LENGTH,
    DEFAULT_BUSINESS_CODE,
    DEFAULT_CHECK_DIGIT,
    NATIONAL_IDENTIFIER_INDEX,
)
from .country import CountryCode
from .errors import (
    CreditorIdentifierFormatError,
    FormatViolation,
    IbanError,
    InvalidCheckDigitError,
    UnsupportedCountryError,
)
from .validation import Stage, ValidationResult

log = logging.getLogger("ibanforge.creditor_id")

# at least one national identifier character
_MIN_LENGTH = NATIONAL_IDENTIFIER_INDEX + 1


def get_country_code(creditor_id: str) -> str:
    return creditor_id[COUNTRY_CODE_INDEX:COUNTRY_CODE_LENGTH]


def get_check_digit(creditor_id: str) -> str:
    return creditor_id[CHECK_DIGIT_INDEX:BBAN_INDEX]


def get_business_code(creditor_id: str) -> str:
    return creditor_id[BUSINESS_CODE_INDEX:NATIONAL_IDENTIFIER_INDEX]


def get_national_identifier(creditor_id: str) -> str:
    return creditor_id[NATIONAL_IDENTIFIER_INDEX:]


def calculate_check_digit(creditor_id: str) -> str:
    """Check digits for ``creditor_id``; its current check digits and business code are ignored."""
    remainder = calculate_mod(
        get_national_identifier(creditor_id) + get_country_code(creditor_id) + DEFAULT_CHECK_DIGIT
    )
    return f"{98 - remainder:02d}"


# ----- stages -----

def _null_check(text) -> None:
    if text is None:
        raise CreditorIdentifierFormatError(
            FormatViolation.IBAN_NOT_NULL, "Null can't be a valid creditor identifier."
        )
    if not isinstance(text, str):
        raise CreditorIdentifierFormatError(
            FormatViolation.IBAN_NOT_NULL,
            f"Creditor identifier must be a string, got {type(text).__name__}.",
        )


def _empty_check(text: str) -> None:
    if len(text) == 0:
        raise CreditorIdentifierFormatError(
            FormatViolation.IBAN_NOT_EMPTY, "Empty string can't be a valid creditor identifier."
        )


def _country_code_format(text: str) -> None:
    if len(text) < COUNTRY_CODE_LENGTH:
        raise CreditorIdentifierFormatError(
            FormatViolation.COUNTRY_CODE_TWO_LETTERS,
            "Creditor identifier must contain 2 char country code.",
            actual=text,
        )
    code = get_country_code(text)
    if not all("A" <= ch <= "Z" for ch in code):
        raise CreditorIdentifierFormatError(
            FormatViolation.COUNTRY_CODE_UPPER_CASE_LETTERS,
            "Creditor identifier country code must contain upper case letters.",
            actual=code,
        )


def _country_exists(text: str) -> None:
    code = get_country_code(text)
    if CountryCode.get_by_code(code) is None:
        raise UnsupportedCountryError(code, "Creditor identifier contains non existing country code.")


def _check_digit_presence(text: str) -> None:
    check_digit = get_check_digit(text)
    if len(check_digit) < CHECK_DIGIT_LENGTH:
        raise CreditorIdentifierFormatError(
            FormatViolation.CHECK_DIGIT_TWO_DIGITS,
            "Creditor identifier must contain 2 digit check digit.",
            actual=check_digit,
        )
    if not check_digit.isdigit() or not check_digit.isascii():
        raise CreditorIdentifierFormatError(
            FormatViolation.CHECK_DIGIT_ONLY_DIGITS,
            "Creditor identifier's check digit should contain only digits.",
            actual=check_digit,
        )


def _length(text: str) -> None:
    if not _MIN_LENGTH <= len(text) <= CREDITOR_ID_MAX_LENGTH:
        raise CreditorIdentifierFormatError(
            FormatViolation.CREDITOR_ID_LENGTH,
            f"[{text}] length is {len(text)}, expected {_MIN_LENGTH} to {CREDITOR_ID_MAX_LENGTH} characters",
            actual=len(text),
            expected=CREDITOR_ID_MAX_LENGTH,
        )


def _characters(text: str) -> None:
    for i in range(BUSINESS_CODE_INDEX, len(text)):
        ch = text[i]
        if not ("0" <= ch <= "9" or "A" <= ch <= "Z"):
            raise CreditorIdentifierFormatError(
                FormatViolation.CREDITOR_ID_VALID_CHARACTERS,
                f"Invalid Character[{i}] = '{ch}'",
                actual=i,
                invalid_character=ch,
            )


def _check_digit(text: str) -> None:
    actual = get_check_digit(text)
    expected = calculate_check_digit(text)
    if actual != expected:
        raise InvalidCheckDigitError(
            actual,
            expected,
            f"[{text}] has invalid check digit: {actual}, expected check digit is: {expected}",
        )


_STAGES: List[Tuple[Stage, Callable[[str], None]]] = [
    (Stage.NULL_CHECK, _null_check),
    (Stage.EMPTY_CHECK, _empty_check),
    (Stage.COUNTRY_CODE_FORMAT, _country_code_format),
    (Stage.COUNTRY_EXISTS, _country_exists),
    (Stage.CHECK_DIGIT_PRESENCE, _check_digit_presence),
    (Stage.TOTAL_LENGTH, _length),
    (Stage.STRUCTURAL_FIELDS, _characters),
    (Stage.MOD97_CHECK_DIGIT, _check_digit),
]


def validate(creditor_id: Optional[str]) -> ValidationResult:
    for stage, fn in _STAGES:
        try:
            fn(creditor_id)
        except IbanError as e:
            log.debug("creditor identifier rejected at %s: %s", stage.value, e.message)
            return ValidationResult(False, stage, e)
    return ValidationResult(True)


def check(creditor_id: Optional[str]) -> None:
    validate(creditor_id).raise_for_error()


def is_valid(creditor_id: Optional[str]) -> bool:
    return validate(creditor_id).ok


@dataclass(frozen=True)
class CreditorIdentifier:
    value: str

    @classmethod
    def value_of(cls, text: str) -> "CreditorIdentifier":
        check(text)
        return cls(text)

    @property
    def country_code(self) -> CountryCode:
        return CountryCode(get_country_code(self.value))

    @property
    def check_digit(self) -> str:
        return get_check_digit(self.value)

    @property
    def business_code(self) -> str:
        return get_business_code(self.value)

    @property
    def national_identifier(self) -> str:
        return get_national_identifier(self.value)

    def __str__(self) -> str:
        return self.value


class CreditorIdentifierBuilder:
    """Builds a creditor identifier; the business code defaults to ``ZZZ``."""

    def __init__(self):
        self._country: Optional[CountryCode] = None
        self._business_code: Optional[str] = DEFAULT_BUSINESS_CODE
        self._national_identifier: Optional[str] = None

    def country_code(self, country: Union[CountryCode, str]) -> "CreditorIdentifierBuilder":
        resolved = country if isinstance(country, CountryCode) else CountryCode.get_by_code(country)
        if resolved is None:
            raise UnsupportedCountryError(str(country), f"Country code [{country}] does not exist.")
        self._country = resolved
        return self

    def business_code(self, value: Optional[str]) -> "CreditorIdentifierBuilder":
        self._business_code = value
        return self

    def national_identifier(self, value: Optional[str]) -> "CreditorIdentifierBuilder":
        self._national_identifier = value
        return self

    def build(self, validate: bool = True) -> CreditorIdentifier:
        if self._country is None:
            raise CreditorIdentifierFormatError(
                FormatViolation.COUNTRY_CODE_NOT_NULL, "countryCode is required; it cannot be null"
            )
        if self._business_code is None:
            raise CreditorIdentifierFormatError(
                FormatViolation.BUSINESS_CODE_NOT_NULL, "creditorBusinessCode is required; it cannot be null"
            )
        if self._national_identifier is None:
            raise CreditorIdentifierFormatError(
                FormatViolation.NATIONAL_IDENTIFIER_NOT_NULL, "nationalIdentifier is required; it cannot be null"
            )
        draft = f"{self._country.value}{DEFAULT_CHECK_DIGIT}{self._business_code}{self._national_identifier}"
        if validate:
            _length(draft)
            _characters(draft)
        value = f"{self._country.value}{calculate_check_digit(draft)}{self._business_code}{self._national_identifier}"
        if validate:
            check(value)
        return CreditorIdentifier(value)


__all__ = [
    "CreditorIdentifier",
    "CreditorIdentifierBuilder",
    "validate",
    "check",
    "is_valid",
    "calculate_check_digit",
    "get_country_code",
    "get_check_digit",
    "get_business_code",
    "get_national_identifier",
]
