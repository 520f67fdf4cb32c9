from __future__ import annotations

import logging
import random

import pytest

from ibanforge import validation
from ibanforge.bban import EntryType
from ibanforge.config import ValidationConfig
from ibanforge.country import CountryCode
from ibanforge.errors import (
    FormatViolation,
    IbanFormatError,
    InvalidCheckDigitError,
    InvalidNationalCheckDigitError,
    UnsupportedCountryError,
)
from ibanforge.formatting import IbanFormat
from ibanforge.iban import Iban, IbanBuilder
from ibanforge.national import FunctionAlgorithm


def _gb():
    return IbanBuilder().country_code(CountryCode.GB).bank_code("NWBK").branch_code("601613").account_number("31926819")


def test_build():
    iban = _gb().build()
    assert iban.value == "GB29NWBK60161331926819"
    assert str(iban) == "GB29NWBK60161331926819"
    assert iban.check_digit == "29"


def test_build_from_string_country_code():
    iban = IbanBuilder().country_code("de").bank_code("37040044").account_number("0532013000").build()
    assert iban.value == "DE89370400440532013000"


def test_build_with_every_entry_type():
    iban = (
        IbanBuilder()
        .country_code(CountryCode.BR)
        .bank_code("00360305")
        .branch_code("00001")
        .account_number("0009795493")
        .account_type("P")
        .owner_account_type("1")
        .build()
    )
    assert iban.value == "BR9700360305000010009795493P1"
    iceland = (
        IbanBuilder()
        .country_code("IS")
        .bank_code("01")
        .branch_code("59")
        .account_type("26")
        .account_number("007654")
        .identification_number("5510730339")
        .build()
    )
    assert iceland.value == "IS140159260076545510730339"


def test_required_fields():
    with pytest.raises(IbanFormatError) as ei:
        IbanBuilder().bank_code("NWBK").account_number("31926819").build()
    assert ei.value.violation is FormatViolation.COUNTRY_CODE_NOT_NULL
    with pytest.raises(IbanFormatError) as ei:
        IbanBuilder().country_code("GB").account_number("31926819").build()
    assert ei.value.violation is FormatViolation.BANK_CODE_NOT_NULL
    with pytest.raises(IbanFormatError) as ei:
        IbanBuilder().country_code("GB").bank_code("NWBK").build()
    assert ei.value.violation is FormatViolation.ACCOUNT_NUMBER_NOT_NULL


def test_missing_layout_field():
    with pytest.raises(IbanFormatError) as ei:
        IbanBuilder().country_code("GB").bank_code("NWBK").account_number("31926819").build()
    assert ei.value.violation is FormatViolation.BBAN_LENGTH
    assert ei.value.entry_type is EntryType.branch_code


def test_field_values_are_validated():
    with pytest.raises(IbanFormatError) as ei:
        _gb().bank_code("NWB").build()
    assert ei.value.violation is FormatViolation.BBAN_LENGTH
    with pytest.raises(IbanFormatError) as ei:
        _gb().bank_code("NWB1").build()
    assert ei.value.violation is FormatViolation.BBAN_ONLY_UPPER_CASE_LETTERS


def test_build_without_validation():
    iban = _gb().bank_code("nwbk").build(validate=False)
    assert iban.bban == "nwbk60161331926819"
    assert not validation.is_valid(iban.value)


def test_unknown_and_unsupported_countries():
    with pytest.raises(UnsupportedCountryError):
        IbanBuilder().country_code("ZZ")
    with pytest.raises(UnsupportedCountryError):
        IbanBuilder().country_code("US").bank_code("1").account_number("2").build()


def test_build_checks_national_digit_when_enabled():
    builder = (
        IbanBuilder()
        .country_code("ES")
        .bank_code("2100")
        .branch_code("0418")
        .national_check_digit("46")
        .account_number("0200051332")
    )
    assert validation.is_valid(builder.build().value)
    validation.configure(ValidationConfig(national_check_digits=True))
    with pytest.raises(InvalidNationalCheckDigitError):
        builder.build()


def test_value_of_and_getters():
    iban = Iban.value_of("ES9121000418450200051332")
    assert iban.country_code is CountryCode.ES
    assert iban.check_digit == "91"
    assert iban.bban == "21000418450200051332"
    assert iban.bank_code == "2100"
    assert iban.branch_code == "0418"
    assert iban.national_check_digit == "45"
    assert iban.account_number == "0200051332"
    assert iban.account_type is None
    assert iban.owner_account_type is None
    assert iban.identification_number is None
    assert iban.to_formatted_string() == "ES91 2100 0418 4502 0005 1332"
    assert iban.as_bban().fields()[EntryType.bank_code] == "2100"


def test_value_of_spaced():
    iban = Iban.value_of("GB29 NWBK 6016 1331 9268 19", IbanFormat.SPACED)
    assert iban.value == "GB29NWBK60161331926819"
    assert iban == _gb().build()


def test_value_of_rejects_invalid():
    with pytest.raises(InvalidCheckDigitError):
        Iban.value_of("AT621904300234573201")
    with pytest.raises(UnsupportedCountryError):
        Iban.value_of("ZZ018786767")
    with pytest.raises(IbanFormatError):
        Iban.value_of("")


# ----- random generation -----

def test_random_round_trip_for_every_supported_country():
    for country in validation.supported_countries():
        iban = Iban.random(country, seed=2024)
        assert iban.country_code is country
        assert validation.is_valid(iban.value), iban.value
        parsed = Iban.value_of(iban.value)
        assert parsed == iban
        assert parsed.as_bban().fields() == iban.as_bban().fields()


def test_random_passes_national_check():
    for country in validation.algorithms.supported_countries():
        for seed in range(5):
            iban = Iban.random(country, seed=seed)
            assert validation.is_valid_with_national_check_digit(iban.value), iban.value


def test_random_is_reproducible():
    assert Iban.random("DE", seed=5) == Iban.random("DE", seed=5)
    assert Iban.random(seed=8) == Iban.random(seed=8)
    assert Iban.random(seed=8).country_code in validation.supported_countries()


def test_random_keeps_supplied_fields():
    iban = IbanBuilder().country_code("ES").bank_code("2100").random_source(3).build_random()
    assert iban.bank_code == "2100"
    assert validation.is_valid_with_national_check_digit(iban.value)


def test_random_keeps_supplied_national_check_digit():
    iban = IbanBuilder().country_code("ES").national_check_digit("00").random_source(4).build_random()
    assert iban.national_check_digit == "00"
    assert validation.is_valid(iban.value)


def test_random_keeps_supplied_dutch_account():
    iban = IbanBuilder().country_code("NL").account_number("0417164500").random_source(1).build_random()
    assert iban.account_number == "0417164500"
    assert validation.is_valid(iban.value)


def test_random_validates_supplied_fields():
    with pytest.raises(IbanFormatError):
        IbanBuilder().country_code("GB").bank_code("12").build_random()


def test_random_source_accepts_generator():
    a = IbanBuilder().country_code("FR").random_source(random.Random(9)).build_random()
    b = IbanBuilder().country_code("FR").random_source(random.Random(9)).build_random()
    assert a == b


def test_random_seed_from_environment(monkeypatch):
    monkeypatch.setenv("IBANFORGE_RANDOM_SEED", "77")
    validation.reset_defaults()
    assert Iban.random("IT") == Iban.random("IT")


def test_random_macedonian_ibans_pass_national_check():
    ibans = [Iban.random("MK", seed=seed).value for seed in range(10)]
    assert all(validation.is_valid_with_national_check_digit(value) for value in ibans), ibans


def test_random_with_plugged_rule_on_layout_without_check_digit():
    validation.register_algorithm(FunctionAlgorithm(CountryCode.DE, calculate=lambda b: "1"))
    iban = Iban.random("DE", seed=1)
    assert validation.is_valid(iban.value)
    assert len(iban.value) == 22


def test_random_logs_when_no_national_digit_exists(caplog):
    validation.register_algorithm(FunctionAlgorithm(CountryCode.DE, calculate=lambda b: None))
    with caplog.at_level(logging.DEBUG, logger="ibanforge.iban"):
        iban = Iban.random("DE", seed=2)
    assert validation.is_valid(iban.value)
    assert any(r.name == "ibanforge.iban" and "DE" in r.getMessage() for r in caplog.records)
