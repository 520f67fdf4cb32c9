from __future__ import annotations

import pytest

from ibanforge.bban import BUILT_IN_STRUCTURES, EntryType, extract_entry, split_bban, validate_bban, validate_bban_entry
from ibanforge.bban.value import Bban
from ibanforge.country import CountryCode
from ibanforge.errors import FormatViolation, IbanFormatError, UnsupportedCountryError

GB = BUILT_IN_STRUCTURES[CountryCode.GB]


def test_valid_bban():
    validate_bban(CountryCode.GB, "NWBK60161331926819", GB)


def test_short_bban_reports_lengths():
    with pytest.raises(IbanFormatError) as ei:
        validate_bban(CountryCode.GB, "NWBK6016133192681", GB)
    assert ei.value.violation is FormatViolation.BBAN_LENGTH
    assert ei.value.actual == 17
    assert ei.value.expected == 18


def test_digit_field_with_letter():
    with pytest.raises(IbanFormatError) as ei:
        validate_bban(CountryCode.GB, "NWBK6016133192681X", GB)
    assert ei.value.violation is FormatViolation.BBAN_ONLY_DIGITS
    assert ei.value.entry_type is EntryType.account_number
    assert ei.value.invalid_character == "X"


def test_letter_field_with_lower_case():
    with pytest.raises(IbanFormatError) as ei:
        validate_bban(CountryCode.GB, "NwBK60161331926819", GB)
    assert ei.value.violation is FormatViolation.BBAN_ONLY_UPPER_CASE_LETTERS
    assert ei.value.entry_type is EntryType.bank_code
    assert ei.value.invalid_character == "w"


def test_alphanumeric_field_with_symbol():
    ch = BUILT_IN_STRUCTURES[CountryCode.CH]
    with pytest.raises(IbanFormatError) as ei:
        validate_bban(CountryCode.CH, "0076201162385295-", ch)
    assert ei.value.violation is FormatViolation.BBAN_ONLY_DIGITS_OR_LETTERS


def test_missing_structure_is_unsupported():
    with pytest.raises(UnsupportedCountryError):
        validate_bban(CountryCode.LY, "123", None)


def test_validate_single_entry():
    validate_bban_entry(CountryCode.GB, GB, EntryType.bank_code, "NWBK")
    with pytest.raises(IbanFormatError) as ei:
        validate_bban_entry(CountryCode.GB, GB, EntryType.bank_code, "NWB")
    assert ei.value.violation is FormatViolation.BBAN_LENGTH
    with pytest.raises(IbanFormatError) as ei:
        validate_bban_entry(CountryCode.GB, GB, EntryType.national_check_digit, "1")
    assert ei.value.violation is FormatViolation.BBAN_INVALID_ENTRY_TYPE


def test_split_and_extract():
    parts = split_bban(GB, "NWBK60161331926819")
    assert parts == {
        EntryType.bank_code: "NWBK",
        EntryType.branch_code: "601613",
        EntryType.account_number: "31926819",
    }
    assert extract_entry(GB, "NWBK60161331926819", EntryType.branch_code) == "601613"
    assert extract_entry(GB, "NWBK60161331926819", EntryType.account_type) is None
    assert extract_entry(GB, "NWBK6", EntryType.account_number) is None
    assert extract_entry(None, "NWBK60161331926819", EntryType.bank_code) is None


def test_bban_value_fields_and_replace():
    es = BUILT_IN_STRUCTURES[CountryCode.ES]
    b = Bban(CountryCode.ES, "21000418450200051332", es)
    assert b.bank_code == "2100"
    assert b.branch_code == "0418"
    assert b.national_check_digit == "45"
    assert b.account_number == "0200051332"
    assert b.identification_number is None
    changed = b.replace(EntryType.branch_code, "0419")
    assert changed.value == "21000419450200051332"
    assert b.value == "21000418450200051332"
    with pytest.raises(ValueError):
        b.replace(EntryType.branch_code, "419")
    with pytest.raises(KeyError):
        b.replace(EntryType.account_type, "01")
