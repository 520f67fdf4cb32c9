"""
BBAN layouts per country.

``BUILT_IN_STRUCTURES`` is the compiled-in table, built once at import and
never mutated. ``StructureRegistry`` layers explicit registrations (providers,
tests, callers) on top of it; a later registration for a country replaces the
earlier one wholesale.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from ..country import CountryCode
from .entry import (
    EntryType,
    FieldDescriptor,
    account_number,
    account_type,
    bank_code,
    branch_code,
    identification_number,
    national_check_digit,
    owner_account_number,
)

log = logging.getLogger("ibanforge.registry")


@dataclass(frozen=True, init=False)
class BbanStructure:
    entries: Tuple[FieldDescriptor, ...]

    def __init__(self, *entries: FieldDescriptor):
        seen = set()
        for entry in entries:
            if entry.entry_type in seen:
                raise ValueError(f"duplicate BBAN entry type: {entry.entry_type.value}")
            seen.add(entry.entry_type)
        object.__setattr__(self, "entries", tuple(entries))

    @property
    def bban_length(self) -> int:
        return sum(e.length for e in self.entries)

    @property
    def iban_length(self) -> int:
        return self.bban_length + 4

    def entry(self, entry_type: EntryType) -> Optional[FieldDescriptor]:
        for e in self.entries:
            if e.entry_type == entry_type:
                return e
        return None

    def has_entry(self, entry_type: EntryType) -> bool:
        return self.entry(entry_type) is not None

    @property
    def has_national_check_digit(self) -> bool:
        return self.has_entry(EntryType.national_check_digit)

    def offsets(self) -> List[Tuple[FieldDescriptor, int, int]]:
        """(descriptor, start, end) for every field in layout order."""
        out = []
        pos = 0
        for e in self.entries:
            out.append((e, pos, pos + e.length))
            pos += e.length
        return out


# Shared layouts: sub-territories use their own country code (or the parent's)
# with an identical BBAN; only the IBAN check digits differ.
FRENCH_STRUCTURE = BbanStructure(
    bank_code(5, "n"),
    branch_code(5, "n"),
    account_number(11, "c"),
    national_check_digit(2, "n"),
)

UNITED_KINGDOM_STRUCTURE = BbanStructure(
    bank_code(4, "a"),
    branch_code(6, "n"),
    account_number(8, "n"),
)

FINLAND_STRUCTURE = BbanStructure(
    bank_code(6, "n"),
    account_number(7, "n"),
    national_check_digit(1, "n"),
)

_FRENCH_TERRITORIES = ("FR", "GF", "GP", "MQ", "RE", "PF", "TF", "YT", "NC", "BL", "MF", "PM", "WF")
_BRITISH_TERRITORIES = ("GB", "IM", "GG", "JE")
_FINNISH_TERRITORIES = ("FI", "AX")


def _build_table() -> Dict[CountryCode, BbanStructure]:
    t: Dict[str, BbanStructure] = {
        "AL": BbanStructure(bank_code(3, "n"), branch_code(4, "n"), national_check_digit(1, "n"), account_number(16, "c")),
        "AD": BbanStructure(bank_code(4, "n"), branch_code(4, "n"), account_number(12, "c")),
        "AO": BbanStructure(bank_code(4, "n"), branch_code(4, "n"), account_number(11, "n"), national_check_digit(2, "n")),
        "AT": BbanStructure(bank_code(5, "n"), account_number(11, "n")),
        "AZ": BbanStructure(bank_code(4, "a"), account_number(20, "c")),
        "BH": BbanStructure(bank_code(4, "a"), account_number(14, "c")),
        "BE": BbanStructure(bank_code(3, "n"), account_number(7, "n"), national_check_digit(2, "n")),
        "BA": BbanStructure(bank_code(3, "n"), branch_code(3, "n"), account_number(8, "n"), national_check_digit(2, "n")),
        "BR": BbanStructure(
            bank_code(8, "n"), branch_code(5, "n"), account_number(10, "n"),
            account_type(1, "a"), owner_account_number(1, "c"),
        ),
        "BG": BbanStructure(bank_code(4, "a"), branch_code(4, "n"), account_type(2, "n"), account_number(8, "c")),
        "BI": BbanStructure(bank_code(5, "n"), branch_code(5, "n"), account_number(13, "n")),
        "BY": BbanStructure(bank_code(4, "c"), branch_code(4, "n"), account_number(16, "c")),
        "CH": BbanStructure(bank_code(5, "n"), account_number(12, "c")),
        "CR": BbanStructure(bank_code(4, "n"), account_number(14, "n")),
        "CV": BbanStructure(bank_code(4, "n"), branch_code(4, "n"), account_number(13, "c")),
        "CY": BbanStructure(bank_code(3, "n"), branch_code(5, "n"), account_number(16, "c")),
        "CZ": BbanStructure(bank_code(4, "n"), account_number(16, "n")),
        "DE": BbanStructure(bank_code(8, "n"), account_number(10, "n")),
        "DK": BbanStructure(bank_code(4, "n"), account_number(10, "n")),
        "DO": BbanStructure(bank_code(4, "c"), account_number(20, "n")),
        "EE": BbanStructure(bank_code(2, "n"), branch_code(2, "n"), account_number(11, "n"), national_check_digit(1, "n")),
        "EG": BbanStructure(bank_code(4, "n"), branch_code(4, "n"), account_number(17, "n")),
        "ES": BbanStructure(bank_code(4, "n"), branch_code(4, "n"), national_check_digit(2, "n"), account_number(10, "n")),
        "FO": BbanStructure(bank_code(4, "n"), account_number(9, "n"), national_check_digit(1, "n")),
        "GA": BbanStructure(bank_code(5, "n"), branch_code(5, "n"), account_number(13, "c")),
        "GE": BbanStructure(bank_code(2, "a"), account_number(16, "n")),
        "GI": BbanStructure(bank_code(4, "a"), account_number(15, "c")),
        "GL": BbanStructure(bank_code(4, "n"), account_number(10, "n")),
        "GR": BbanStructure(bank_code(3, "n"), branch_code(4, "n"), account_number(16, "c")),
        "GT": BbanStructure(bank_code(4, "c"), account_number(20, "c")),
        "HR": BbanStructure(bank_code(7, "n"), account_number(10, "n")),
        "HU": BbanStructure(bank_code(3, "n"), branch_code(4, "n"), account_number(16, "n"), national_check_digit(1, "n")),
        "IE": BbanStructure(bank_code(4, "a"), branch_code(6, "n"), account_number(8, "n")),
        "IL": BbanStructure(bank_code(3, "n"), branch_code(3, "n"), account_number(13, "n")),
        "IQ": BbanStructure(bank_code(4, "a"), branch_code(3, "n"), account_number(12, "n")),
        "IR": BbanStructure(bank_code(3, "n"), account_number(19, "n")),
        "IS": BbanStructure(
            bank_code(2, "n"), branch_code(2, "n"), account_type(2, "n"),
            account_number(6, "n"), identification_number(10, "n"),
        ),
        "IT": BbanStructure(national_check_digit(1, "a"), bank_code(5, "n"), branch_code(5, "n"), account_number(12, "c")),
        "JO": BbanStructure(bank_code(4, "a"), branch_code(4, "n"), account_number(18, "c")),
        "KW": BbanStructure(bank_code(4, "a"), account_number(22, "c")),
        "KZ": BbanStructure(bank_code(3, "n"), account_number(13, "c")),
        "LB": BbanStructure(bank_code(4, "n"), account_number(20, "c")),
        "LC": BbanStructure(bank_code(4, "a"), account_number(24, "c")),
        "LI": BbanStructure(bank_code(5, "n"), account_number(12, "c")),
        "LT": BbanStructure(bank_code(5, "n"), account_number(11, "n")),
        "LU": BbanStructure(bank_code(3, "n"), account_number(13, "c")),
        "LV": BbanStructure(bank_code(4, "a"), account_number(13, "c")),
        "MA": BbanStructure(bank_code(3, "n"), branch_code(5, "n"), account_number(16, "n")),
        "MC": BbanStructure(bank_code(5, "n"), branch_code(5, "n"), account_number(11, "c"), national_check_digit(2, "n")),
        "MD": BbanStructure(bank_code(2, "c"), account_number(18, "c")),
        "ME": BbanStructure(bank_code(3, "n"), account_number(13, "n"), national_check_digit(2, "n")),
        "MK": BbanStructure(bank_code(3, "n"), account_number(10, "c"), national_check_digit(2, "n")),
        "MR": BbanStructure(bank_code(5, "n"), branch_code(5, "n"), account_number(11, "n"), national_check_digit(2, "n")),
        "MT": BbanStructure(bank_code(4, "a"), branch_code(5, "n"), account_number(18, "c")),
        "MU": BbanStructure(bank_code(6, "c"), branch_code(2, "n"), account_number(18, "c")),
        "MZ": BbanStructure(bank_code(4, "n"), branch_code(4, "n"), account_number(11, "n"), national_check_digit(2, "n")),
        "NL": BbanStructure(bank_code(4, "a"), account_number(10, "n")),
        "NO": BbanStructure(bank_code(4, "n"), account_number(6, "n"), national_check_digit(1, "n")),
        "OM": BbanStructure(bank_code(3, "n"), account_number(16, "c")),
        "PK": BbanStructure(bank_code(4, "c"), account_number(16, "n")),
        "PL": BbanStructure(bank_code(3, "n"), branch_code(4, "n"), national_check_digit(1, "n"), account_number(16, "n")),
        "PS": BbanStructure(bank_code(4, "a"), account_number(21, "c")),
        "PT": BbanStructure(bank_code(4, "n"), branch_code(4, "n"), account_number(11, "n"), national_check_digit(2, "n")),
        "QA": BbanStructure(bank_code(4, "a"), account_number(21, "c")),
        "RO": BbanStructure(bank_code(4, "a"), account_number(16, "c")),
        "RS": BbanStructure(bank_code(3, "n"), account_number(13, "n"), national_check_digit(2, "n")),
        "RU": BbanStructure(bank_code(9, "n"), branch_code(5, "n"), account_number(15, "c")),
        "SA": BbanStructure(bank_code(2, "n"), account_number(18, "c")),
        "SC": BbanStructure(bank_code(4, "a"), branch_code(4, "n"), account_number(16, "n"), account_type(3, "a")),
        "SE": BbanStructure(bank_code(3, "n"), account_number(17, "n")),
        "SI": BbanStructure(bank_code(2, "n"), branch_code(3, "n"), account_number(8, "n"), national_check_digit(2, "n")),
        "SK": BbanStructure(bank_code(4, "n"), account_number(16, "n")),
        "SM": BbanStructure(national_check_digit(1, "a"), bank_code(5, "n"), branch_code(5, "n"), account_number(12, "c")),
        "ST": BbanStructure(bank_code(4, "n"), branch_code(4, "n"), account_number(13, "n")),
        "SV": BbanStructure(bank_code(4, "a"), account_number(20, "n")),
        "TL": BbanStructure(bank_code(3, "n"), account_number(14, "n"), national_check_digit(2, "n")),
        "TN": BbanStructure(bank_code(2, "n"), branch_code(3, "n"), account_number(13, "n"), national_check_digit(2, "n")),
        "TR": BbanStructure(bank_code(5, "n"), national_check_digit(1, "c"), account_number(16, "c")),
        "UA": BbanStructure(bank_code(6, "n"), account_number(19, "n")),
        "VA": BbanStructure(bank_code(3, "n"), account_number(15, "n")),
        "VG": BbanStructure(bank_code(4, "a"), account_number(16, "n")),
        "XK": BbanStructure(bank_code(2, "n"), branch_code(2, "n"), account_number(10, "n"), national_check_digit(2, "n")),
        "AE": BbanStructure(bank_code(3, "n"), account_number(16, "c")),
    }
    for code in _FRENCH_TERRITORIES:
        t[code] = FRENCH_STRUCTURE
    for code in _BRITISH_TERRITORIES:
        t[code] = UNITED_KINGDOM_STRUCTURE
    for code in _FINNISH_TERRITORIES:
        t[code] = FINLAND_STRUCTURE
    return {CountryCode(code): structure for code, structure in t.items()}


BUILT_IN_STRUCTURES: Mapping[CountryCode, BbanStructure] = MappingProxyType(_build_table())


class StructureRegistry:
    """
    Country -> BBAN structure lookup.

    The built-in table is copied in exactly once, on first use, under a lock.
    Reads after that take no lock. ``register`` is not synchronised against
    concurrent readers; callers that mutate a warmed-up registry from several
    threads must serialise those calls themselves.
    """

    def __init__(self, builtins: Optional[Mapping[CountryCode, BbanStructure]] = None):
        self._builtins = BUILT_IN_STRUCTURES if builtins is None else builtins
        self._structures: Dict[CountryCode, BbanStructure] = {}
        self._initialized = False
        self._lock = threading.Lock()

    def ensure_initialized(self) -> None:
        if self._initialized:
            return
        with self._lock:
            if self._initialized:
                return
            # explicit registrations made before first use still win
            merged = dict(self._builtins)
            merged.update(self._structures)
            self._structures = merged
            self._initialized = True

    def for_country(self, country: Optional[CountryCode]) -> Optional[BbanStructure]:
        if country is None:
            return None
        self.ensure_initialized()
        return self._structures.get(country)

    def is_supported(self, country: Optional[CountryCode]) -> bool:
        return self.for_country(country) is not None

    def supported_countries(self) -> List[CountryCode]:
        self.ensure_initialized()
        return sorted(self._structures, key=lambda c: c.value)

    def register(self, country: CountryCode, structure: BbanStructure) -> None:
        country = CountryCode(country)
        previous = self._structures.get(country)
        if previous is None and not self._initialized:
            previous = self._builtins.get(country)
        if previous is not None and previous != structure:
            log.info("BBAN structure for %s replaced (%d -> %d chars)", country.value, previous.bban_length, structure.bban_length)
        self._structures[country] = structure

    def register_all(self, structures: Mapping[CountryCode, BbanStructure]) -> None:
        for country, structure in structures.items():
            self.register(country, structure)

    def unregister(self, country: CountryCode) -> bool:
        self.ensure_initialized()
        return self._structures.pop(country, None) is not None

    def reset(self) -> None:
        """Drop every registration and reload the built-in table on next use."""
        with self._lock:
            self._structures = {}
            self._initialized = False


def has_national_check_digit(structure: Optional[BbanStructure]) -> bool:
    return structure is not None and structure.has_national_check_digit


__all__ = [
    "BbanStructure",
    "FRENCH_STRUCTURE",
    "UNITED_KINGDOM_STRUCTURE",
    "FINLAND_STRUCTURE",
    "BUILT_IN_STRUCTURES",
    "StructureRegistry",
    "has_national_check_digit",
]
