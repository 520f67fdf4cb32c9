from __future__ import annotations

import logging

import pytest

from ibanforge.bban import BUILT_IN_STRUCTURES, BbanStructure, account_number, bank_code, national_check_digit
from ibanforge.bban.value import Bban
from ibanforge.country import CountryCode
from ibanforge.errors import InvalidNationalCheckDigitError
from ibanforge.national import (
    BUILT_IN_ALGORITHMS,
    BaNationalCheckDigit,
    BeNationalCheckDigit,
    FunctionAlgorithm,
    NationalAlgorithmRegistry,
    NlNationalCheckDigit,
)
from ibanforge.random_gen import RandomGenerator

# (valid IBAN, same IBAN with the national check broken but MOD-97 intact)
VECTORS = {
    "BA": ("BA391290079401028494", "BA551290079401028594"),
    "BE": ("BE68539007547034", "BE19539007557034"),
    "ES": ("ES9121000418450200051332", "ES4221000418450200061332"),
    "FI": ("FI2112345600000785", "FI9112345600000786"),
    "FR": ("FR1420041010050500013M02606", "FR6020041010050500013M52606"),
    "IT": ("IT60X0542811101000000123456", "IT33X0542811101000000123457"),
    "ME": ("ME25505000012345678951", "ME58505000012345678551"),
    "MK": ("MK07250120000058984", "MK40250120000058584"),
    "NL": ("NL91ABNA0417164300", "NL26ABNA0417164500"),
    "NO": ("NO9386011117947", "NO5086011117945"),
    "PT": ("PT50000201231234567890154", "PT52000201231234567850154"),
    "RS": ("RS35260005601001611379", "RS67260005601001611579"),
    "SI": ("SI56263300012039086", "SI72191000000123538"),
    "SK": ("SK3112000000198742637541", "SK4712000000198742637641"),
    "TN": ("TN5910006035183598478831", "TN1110006035183598478531"),
}


def _bban(iban: str) -> Bban:
    country = CountryCode(iban[:2])
    return Bban(country, iban[4:], BUILT_IN_STRUCTURES[country])


@pytest.fixture
def registry():
    return NationalAlgorithmRegistry()


def test_every_built_in_country_has_vectors(registry):
    assert sorted(c.value for c in registry.supported_countries()) == sorted(VECTORS)
    assert len(BUILT_IN_ALGORITHMS) == 15


@pytest.mark.parametrize("country", sorted(VECTORS))
def test_valid_vector(registry, country):
    bban = _bban(VECTORS[country][0])
    algorithm = registry.get(bban.country_code)
    assert algorithm.validate(bban, algorithm.extract(bban))
    assert algorithm.calculate(bban) == algorithm.extract(bban)
    registry.check(bban)


@pytest.mark.parametrize("country", sorted(VECTORS))
def test_invalid_vector(registry, country):
    bban = _bban(VECTORS[country][1])
    algorithm = registry.get(bban.country_code)
    assert not algorithm.validate(bban, algorithm.extract(bban))
    with pytest.raises(InvalidNationalCheckDigitError) as ei:
        registry.check(bban)
    assert ei.value.country == country
    assert ei.value.actual == algorithm.extract(bban)


def test_second_slovenian_vector(registry):
    registry.check(_bban("SI56191000000123438"))


def test_belgian_formula():
    bban = _bban("BE68539007547034")
    assert int("5390075470") % 97 == 34
    assert BeNationalCheckDigit().calculate(bban) == "34"


def test_mismatch_reports_expected_value(registry):
    with pytest.raises(InvalidNationalCheckDigitError) as ei:
        registry.check(_bban("BE19539007557034"))
    assert ei.value.actual == "34"
    assert ei.value.expected == "37"
    with pytest.raises(InvalidNationalCheckDigitError) as ei:
        registry.check(_bban("ES4221000418450200061332"))
    assert (ei.value.actual, ei.value.expected) == ("45", "46")


def test_dutch_postbank_accounts_are_not_checked():
    nl = NlNationalCheckDigit()
    bban = _bban("NL91ABNA0417164300").replace(
        BUILT_IN_STRUCTURES[CountryCode.NL].entries[1].entry_type, "0001234567"
    )
    assert nl.validate(bban, nl.extract(bban))
    assert nl.calculate(bban) == "7"


@pytest.mark.parametrize("algorithm_cls", BUILT_IN_ALGORITHMS, ids=lambda c: c.__name__)
def test_calculated_digit_always_validates(algorithm_cls):
    algorithm = algorithm_cls()
    structure = BUILT_IN_STRUCTURES[algorithm.country]
    gen = RandomGenerator(seed=1234)
    checked = 0
    for _ in range(200):
        values = gen.fill(structure)
        bban = Bban(algorithm.country, "".join(values[e.entry_type] for e in structure.entries), structure)
        expected = algorithm.calculate(bban)
        if expected is None:
            continue
        checked += 1
        assert algorithm.validate(bban, expected)
        fixed = algorithm.apply(bban)
        assert algorithm.extract(fixed) == expected
        assert algorithm.validate(fixed, algorithm.extract(fixed))
    assert checked > 100


def test_mod97_rule_with_check_digit_inside_bban():
    structure = BbanStructure(bank_code(3, "n"), national_check_digit(2, "n"), account_number(8, "n"))
    bban = Bban(CountryCode.BA, "1290012345678", structure)
    algorithm = BaNationalCheckDigit()
    cd = algorithm.calculate(bban)
    assert cd is not None
    assert algorithm.validate(bban, cd)
    assert not algorithm.validate(bban, f"{(int(cd) + 1) % 100:02d}")


def test_unknown_country_has_no_algorithm(registry):
    assert registry.get(CountryCode.DE) is None
    assert not registry.is_supported(CountryCode.DE)
    assert registry.get(None) is None
    # no algorithm means the national check passes
    registry.check(_bban("DE89370400440532013000"))


def test_register_overrides_and_logs(registry, caplog):
    always = FunctionAlgorithm(CountryCode.BE, calculate=lambda b: b.national_check_digit)
    registry.ensure_initialized()
    with caplog.at_level(logging.INFO, logger="ibanforge.national"):
        registry.register(always)
    assert registry.get(CountryCode.BE) is always
    assert any("BE" in r.getMessage() for r in caplog.records)
    registry.check(_bban("BE19539007557034"))


def test_register_before_first_use_wins(registry):
    custom = FunctionAlgorithm("DE", calculate=lambda b: None, validate=lambda b, cd: True)
    registry.register(custom)
    assert registry.get(CountryCode.DE) is custom
    assert registry.get(CountryCode.BE) is not None


def test_unregister_and_reset(registry):
    assert registry.unregister(CountryCode.BE)
    assert registry.get(CountryCode.BE) is None
    registry.reset()
    assert registry.get(CountryCode.BE) is not None


def test_function_algorithm_custom_extract():
    algorithm = FunctionAlgorithm(
        CountryCode.DE,
        calculate=lambda b: b.value[-1],
        extract=lambda b: b.value[-1],
    )
    bban = _bban("DE89370400440532013000")
    assert algorithm.extract(bban) == "0"
    assert algorithm.validate(bban, "0")
    assert not algorithm.validate(bban, None)
    assert repr(algorithm) == "FunctionAlgorithm(DE)"


def test_macedonian_account_with_letters(registry):
    # MK accounts are alphanumeric; letters count as 10-35
    algorithm = registry.get(CountryCode.MK)
    bban = _bban("MK0725012000A589852")
    assert algorithm.calculate(bban) == "52"
    registry.check(bban)
    with pytest.raises(InvalidNationalCheckDigitError) as ei:
        registry.check(_bban("MK7725012000A589853"))
    assert (ei.value.actual, ei.value.expected) == ("53", "52")


def test_function_algorithm_on_layout_without_check_digit_entry():
    algorithm = FunctionAlgorithm(CountryCode.DE, calculate=lambda b: "1")
    bban = _bban("DE89370400440532013000")
    assert algorithm.apply(bban) == bban


def test_function_algorithm_custom_embed():
    algorithm = FunctionAlgorithm(
        CountryCode.DE,
        calculate=lambda b: "7",
        extract=lambda b: b.value[-1],
        embed=lambda b, cd: Bban(b.country_code, b.value[:-1] + cd, b.structure),
    )
    fixed = algorithm.apply(_bban("DE89370400440532013000"))
    assert fixed.value == "370400440532013007"
    assert algorithm.validate(fixed, algorithm.extract(fixed))
