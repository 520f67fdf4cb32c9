from __future__ import annotations

from typing import Dict, Optional

from ..country import CountryCode
from ..errors import FormatViolation, IbanFormatError, UnsupportedCountryError
from .entry import CharacterClass, EntryType, FieldDescriptor
from .structure import BbanStructure

_CLASS_VIOLATIONS = {
    CharacterClass.n: (FormatViolation.BBAN_ONLY_DIGITS, "[{}] must contain only digits."),
    CharacterClass.a: (FormatViolation.BBAN_ONLY_UPPER_CASE_LETTERS, "[{}] must contain only upper case letters."),
    CharacterClass.c: (FormatViolation.BBAN_ONLY_DIGITS_OR_LETTERS, "[{}] must contain only digits or letters."),
}


def validate_bban_length(structure: BbanStructure, bban: str) -> None:
    expected = structure.bban_length
    actual = len(bban)
    if actual != expected:
        raise IbanFormatError(
            FormatViolation.BBAN_LENGTH,
            f"[{bban}] length is {actual}, expected BBAN length is: {expected}",
            actual=actual,
            expected=expected,
        )


def validate_entry_characters(entry: FieldDescriptor, value: str) -> None:
    cls = entry.character_class
    for ch in value:
        if not cls.matches(ch):
            violation, template = _CLASS_VIOLATIONS[cls]
            raise IbanFormatError(
                violation,
                template.format(value),
                actual=value,
                entry_type=entry.entry_type,
                invalid_character=ch,
            )


def validate_bban(country: CountryCode, bban: str, structure: Optional[BbanStructure]) -> None:
    """Fail closed on any length or character-class deviation."""
    if structure is None:
        raise UnsupportedCountryError(str(country), "Country code is not supported.")
    validate_bban_length(structure, bban)
    for entry, start, end in structure.offsets():
        validate_entry_characters(entry, bban[start:end])


def validate_bban_entry(
    country: CountryCode,
    structure: Optional[BbanStructure],
    entry_type: EntryType,
    value: str,
) -> None:
    """Check one caller-supplied field value against the country layout."""
    if structure is None:
        raise UnsupportedCountryError(str(country), f"Country code [{country}] is not supported.")
    entry = structure.entry(entry_type)
    if entry is None:
        raise IbanFormatError(
            FormatViolation.BBAN_INVALID_ENTRY_TYPE,
            f"Entry type [{EntryType(entry_type).value}] does not exist for country [{country}]",
            entry_type=entry_type,
        )
    if len(value) != entry.length:
        raise IbanFormatError(
            FormatViolation.BBAN_LENGTH,
            f"Entry value [{value}] must be exactly {entry.length} characters long.",
            actual=len(value),
            expected=entry.length,
            entry_type=entry_type,
        )
    validate_entry_characters(entry, value)


def split_bban(structure: BbanStructure, bban: str) -> Dict[EntryType, str]:
    return {entry.entry_type: bban[start:end] for entry, start, end in structure.offsets()}


def extract_entry(structure: Optional[BbanStructure], bban: str, entry_type: EntryType) -> Optional[str]:
    if structure is None:
        return None
    for entry, start, end in structure.offsets():
        if entry.entry_type == entry_type:
            if end > len(bban):
                return None
            return bban[start:end]
    return None


__all__ = [
    "validate_bban",
    "validate_bban_length",
    "validate_bban_entry",
    "validate_entry_characters",
    "split_bban",
    "extract_entry",
]
