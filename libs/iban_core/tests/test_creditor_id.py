from __future__ import annotations

import pytest

from ibanforge import creditor_id
from ibanforge.country import CountryCode
from ibanforge.creditor_id import CreditorIdentifier, CreditorIdentifierBuilder
from ibanforge.errors import (
    CreditorIdentifierFormatError,
    FormatViolation,
    InvalidCheckDigitError,
    UnsupportedCountryError,
)
from ibanforge.validation import Stage

VALID = [
    "DE98ZZZ09999999999",
    "AT61ZZZ01234567890",
    "BE69ZZZ050D000000008",
    "ES59ZZZX1234567L",
    "FR72ZZZ123456",
    "IT66ZZZA1B2C3D4E5F6G7H8",
]


@pytest.mark.parametrize("value", VALID)
def test_valid_identifiers(value):
    assert creditor_id.is_valid(value)
    assert creditor_id.calculate_check_digit(value) == value[2:4]


def test_getters():
    value = "DE98ZZZ09999999999"
    assert creditor_id.get_country_code(value) == "DE"
    assert creditor_id.get_check_digit(value) == "98"
    assert creditor_id.get_business_code(value) == "ZZZ"
    assert creditor_id.get_national_identifier(value) == "09999999999"


def test_business_code_is_not_checked():
    assert creditor_id.is_valid("DE98ABC09999999999")
    assert creditor_id.calculate_check_digit("DE00ABC09999999999") == "98"


def test_wrong_check_digit():
    result = creditor_id.validate("NL97ZZZ123456780000")
    assert not result.ok
    assert result.stage is Stage.MOD97_CHECK_DIGIT
    assert isinstance(result.error, InvalidCheckDigitError)
    assert (result.error.actual, result.error.expected) == ("97", "69")


@pytest.mark.parametrize(
    "value, stage, violation",
    [
        (None, Stage.NULL_CHECK, FormatViolation.IBAN_NOT_NULL),
        ("", Stage.EMPTY_CHECK, FormatViolation.IBAN_NOT_EMPTY),
        ("D", Stage.COUNTRY_CODE_FORMAT, FormatViolation.COUNTRY_CODE_TWO_LETTERS),
        ("de98ZZZ09999999999", Stage.COUNTRY_CODE_FORMAT, FormatViolation.COUNTRY_CODE_UPPER_CASE_LETTERS),
        ("DE9", Stage.CHECK_DIGIT_PRESENCE, FormatViolation.CHECK_DIGIT_TWO_DIGITS),
        ("DEX8ZZZ09999999999", Stage.CHECK_DIGIT_PRESENCE, FormatViolation.CHECK_DIGIT_ONLY_DIGITS),
        ("DE98ZZZ", Stage.TOTAL_LENGTH, FormatViolation.CREDITOR_ID_LENGTH),
        ("DE98ZZZ" + "1" * 29, Stage.TOTAL_LENGTH, FormatViolation.CREDITOR_ID_LENGTH),
        ("DE98ZZZ0999-999999", Stage.STRUCTURAL_FIELDS, FormatViolation.CREDITOR_ID_VALID_CHARACTERS),
    ],
)
def test_format_failures(value, stage, violation):
    result = creditor_id.validate(value)
    assert result.stage is stage
    assert isinstance(result.error, CreditorIdentifierFormatError)
    assert result.error.violation is violation


def test_unknown_country():
    with pytest.raises(UnsupportedCountryError):
        creditor_id.check("QQ98ZZZ09999999999")


def test_invalid_character_is_reported():
    with pytest.raises(CreditorIdentifierFormatError) as ei:
        creditor_id.check("DE98ZZZ0999-999999")
    assert ei.value.invalid_character == "-"
    assert ei.value.actual == 11


def test_value_of():
    ci = CreditorIdentifier.value_of("ES59ZZZX1234567L")
    assert ci.country_code is CountryCode.ES
    assert ci.check_digit == "59"
    assert ci.business_code == "ZZZ"
    assert ci.national_identifier == "X1234567L"
    assert str(ci) == "ES59ZZZX1234567L"
    with pytest.raises(InvalidCheckDigitError):
        CreditorIdentifier.value_of("ES58ZZZX1234567L")


def test_builder():
    ci = CreditorIdentifierBuilder().country_code("DE").national_identifier("09999999999").build()
    assert ci == CreditorIdentifier("DE98ZZZ09999999999")
    other = CreditorIdentifierBuilder().country_code(CountryCode.DE).business_code("ABC").national_identifier("09999999999").build()
    assert other.value == "DE98ABC09999999999"


def test_builder_requires_fields():
    with pytest.raises(CreditorIdentifierFormatError) as ei:
        CreditorIdentifierBuilder().national_identifier("1").build()
    assert ei.value.violation is FormatViolation.COUNTRY_CODE_NOT_NULL
    with pytest.raises(CreditorIdentifierFormatError) as ei:
        CreditorIdentifierBuilder().country_code("DE").build()
    assert ei.value.violation is FormatViolation.NATIONAL_IDENTIFIER_NOT_NULL
    with pytest.raises(CreditorIdentifierFormatError) as ei:
        CreditorIdentifierBuilder().country_code("DE").business_code(None).national_identifier("1").build()
    assert ei.value.violation is FormatViolation.BUSINESS_CODE_NOT_NULL
    with pytest.raises(UnsupportedCountryError):
        CreditorIdentifierBuilder().country_code("QQ")


def test_builder_rejects_bad_characters():
    with pytest.raises(CreditorIdentifierFormatError) as ei:
        CreditorIdentifierBuilder().country_code("DE").national_identifier("0999 999").build()
    assert ei.value.violation is FormatViolation.CREDITOR_ID_VALID_CHARACTERS
