"""
IBAN value object and builder.

``Iban`` instances are immutable and always valid for the registries they were
built against: ``value_of`` validates, ``IbanBuilder.build`` assembles the
BBAN from its fields and computes the MOD-97 check digit last.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from . import validation
from .bban.entry import EntryType
from .bban.structure import BbanStructure
from .bban.validator import validate_bban_entry
from .bban.value import Bban
from .checkdigit.mod97 import calculate_check_digit
from .constants import BBAN_INDEX, CHECK_DIGIT_INDEX, COUNTRY_CODE_LENGTH
from .country import CountryCode
from .errors import FormatViolation, IbanFormatError, UnsupportedCountryError
from .formatting import IbanFormat, to_compact, to_formatted_string
from .random_gen import RandomGenerator

log = logging.getLogger("ibanforge.iban")

# random generation retries when a national rule admits no check digit
_MAX_RANDOM_ATTEMPTS = 20


@dataclass(frozen=True)
class Iban:
    value: str
    structure: BbanStructure = field(compare=False, repr=False)

    @classmethod
    def value_of(cls, text: str, fmt: IbanFormat = IbanFormat.COMPACT) -> "Iban":
        """Parse and validate; raises the first failing stage's ``IbanError``."""
        validation.check(text, fmt)
        compact = to_compact(text) if IbanFormat(fmt) is IbanFormat.SPACED else text
        country = CountryCode(compact[:COUNTRY_CODE_LENGTH])
        return cls(compact, validation.structure_for(country))

    @classmethod
    def random(cls, country: Optional[Union[CountryCode, str]] = None, seed: Optional[int] = None) -> "Iban":
        builder = IbanBuilder()
        if country is not None:
            builder.country_code(country)
        if seed is not None:
            builder.random_source(seed)
        return builder.build_random()

    @property
    def country_code(self) -> CountryCode:
        return CountryCode(self.value[:COUNTRY_CODE_LENGTH])

    @property
    def check_digit(self) -> str:
        return self.value[CHECK_DIGIT_INDEX:BBAN_INDEX]

    @property
    def bban(self) -> str:
        return self.value[BBAN_INDEX:]

    def as_bban(self) -> Bban:
        return Bban(self.country_code, self.bban, self.structure)

    @property
    def bank_code(self) -> Optional[str]:
        return self.as_bban().bank_code

    @property
    def branch_code(self) -> Optional[str]:
        return self.as_bban().branch_code

    @property
    def account_number(self) -> Optional[str]:
        return self.as_bban().account_number

    @property
    def national_check_digit(self) -> Optional[str]:
        return self.as_bban().national_check_digit

    @property
    def account_type(self) -> Optional[str]:
        return self.as_bban().account_type

    @property
    def owner_account_type(self) -> Optional[str]:
        return self.as_bban().owner_account_type

    @property
    def identification_number(self) -> Optional[str]:
        return self.as_bban().identification_number

    def to_formatted_string(self) -> str:
        return to_formatted_string(self.value)

    def __str__(self) -> str:
        return self.value


class IbanBuilder:
    """
    Fluent IBAN builder.

    ``build()`` needs at least a country code, bank code and account number
    (plus every other field the country layout has). ``build_random()`` fills
    whatever was not supplied.
    """

    def __init__(self):
        self._country: Optional[CountryCode] = None
        self._fields: Dict[EntryType, str] = {}
        self._random: Optional[random.Random] = None

    def country_code(self, country: Union[CountryCode, str]) -> "IbanBuilder":
        resolved = country if isinstance(country, CountryCode) else CountryCode.get_by_code(country)
        if resolved is None:
            raise UnsupportedCountryError(str(country), f"Country code [{country}] does not exist.")
        self._country = resolved
        return self

    def _set(self, entry_type: EntryType, value: Optional[str]) -> "IbanBuilder":
        if value is None:
            self._fields.pop(entry_type, None)
        else:
            self._fields[entry_type] = value
        return self

    def bank_code(self, value: Optional[str]) -> "IbanBuilder":
        return self._set(EntryType.bank_code, value)

    def branch_code(self, value: Optional[str]) -> "IbanBuilder":
        return self._set(EntryType.branch_code, value)

    def account_number(self, value: Optional[str]) -> "IbanBuilder":
        return self._set(EntryType.account_number, value)

    def national_check_digit(self, value: Optional[str]) -> "IbanBuilder":
        return self._set(EntryType.national_check_digit, value)

    def account_type(self, value: Optional[str]) -> "IbanBuilder":
        return self._set(EntryType.account_type, value)

    def owner_account_type(self, value: Optional[str]) -> "IbanBuilder":
        return self._set(EntryType.owner_account_number, value)

    def identification_number(self, value: Optional[str]) -> "IbanBuilder":
        return self._set(EntryType.identification_number, value)

    def random_source(self, source: Union[random.Random, int, None]) -> "IbanBuilder":
        """A ``random.Random`` to draw from, or an int seed for a fresh one."""
        if source is None or isinstance(source, random.Random):
            self._random = source
        else:
            self._random = random.Random(source)
        return self

    # ----- build -----

    def _structure(self) -> BbanStructure:
        structure = validation.structure_for(self._country)
        if structure is None:
            raise UnsupportedCountryError(self._country.value, f"Country code [{self._country.value}] is not supported.")
        return structure

    def _validate_supplied(self, structure: BbanStructure) -> None:
        for entry in structure.entries:
            value = self._fields.get(entry.entry_type)
            if value is not None:
                validate_bban_entry(self._country, structure, entry.entry_type, value)

    def _assemble(self, structure: BbanStructure, values: Dict[EntryType, str]) -> str:
        parts = []
        for entry in structure.entries:
            value = values.get(entry.entry_type)
            if value is None:
                raise IbanFormatError(
                    FormatViolation.BBAN_LENGTH,
                    f"{entry.entry_type.value} is required for country {self._country.value}",
                    actual=0,
                    expected=entry.length,
                    entry_type=entry.entry_type,
                )
            parts.append(value)
        return "".join(parts)

    def _iban(self, structure: BbanStructure, bban: str) -> Iban:
        check_digit = calculate_check_digit(self._country, bban)
        return Iban(f"{self._country.value}{check_digit}{bban}", structure)

    def build(self, validate: bool = True) -> Iban:
        if self._country is None:
            raise IbanFormatError(FormatViolation.COUNTRY_CODE_NOT_NULL, "countryCode is required; it cannot be null")
        if self._fields.get(EntryType.bank_code) is None:
            raise IbanFormatError(FormatViolation.BANK_CODE_NOT_NULL, "bankCode is required; it cannot be null")
        if self._fields.get(EntryType.account_number) is None:
            raise IbanFormatError(FormatViolation.ACCOUNT_NUMBER_NOT_NULL, "accountNumber is required; it cannot be null")
        structure = self._structure()
        if validate:
            self._validate_supplied(structure)
        iban = self._iban(structure, self._assemble(structure, self._fields))
        if validate:
            validation.check(iban.value)
        return iban

    def _rng(self) -> random.Random:
        if self._random is None:
            seed = validation.get_config().random_seed
            self._random = random.Random(seed)
        return self._random

    def build_random(self) -> Iban:
        rng = RandomGenerator(rng=self._rng())
        if self._country is None:
            self._country = rng.random_country(validation.supported_countries())
        structure = self._structure()
        self._validate_supplied(structure)
        algorithm = validation.algorithm_for(self._country)

        bban = None
        for _ in range(_MAX_RANDOM_ATTEMPTS):
            values = rng.fill(structure, self._fields)
            bban = Bban(self._country, self._assemble(structure, values), structure)
            if algorithm is None:
                break
            updated = algorithm.apply(bban)
            changed = [t for t, v in updated.fields().items() if bban.field(t) != v]
            if any(t in self._fields for t in changed):
                # the check digit lives in a field the caller fixed
                break
            bban = updated
            if algorithm.calculate(bban) is not None:
                break
            if all(t in self._fields for t in values):
                break
        else:
            log.debug("no national check digit found for random %s bban", self._country.value)
        return self._iban(structure, bban.value)


__all__ = ["Iban", "IbanBuilder", "IbanFormat", "Bban"]
