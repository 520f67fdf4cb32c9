from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from ..country import CountryCode
from .entry import EntryType
from .structure import BbanStructure


@dataclass(frozen=True)
class Bban:
    """A BBAN string together with the layout used to read it."""
    country_code: CountryCode
    value: str
    structure: BbanStructure

    def field(self, entry_type: EntryType) -> Optional[str]:
        for entry, start, end in self.structure.offsets():
            if entry.entry_type == entry_type:
                return self.value[start:end] if end <= len(self.value) else None
        return None

    def fields(self) -> Dict[EntryType, str]:
        return {entry.entry_type: self.value[start:end] for entry, start, end in self.structure.offsets()}

    def replace(self, entry_type: EntryType, new_value: str) -> "Bban":
        """Copy with one field swapped; the new value must keep the field length."""
        for entry, start, end in self.structure.offsets():
            if entry.entry_type == entry_type:
                if len(new_value) != entry.length:
                    raise ValueError(f"{entry_type.value} must be {entry.length} characters, got {len(new_value)}")
                return Bban(self.country_code, self.value[:start] + new_value + self.value[end:], self.structure)
        raise KeyError(entry_type)

    @property
    def bank_code(self) -> Optional[str]:
        return self.field(EntryType.bank_code)

    @property
    def branch_code(self) -> Optional[str]:
        return self.field(EntryType.branch_code)

    @property
    def account_number(self) -> Optional[str]:
        return self.field(EntryType.account_number)

    @property
    def national_check_digit(self) -> Optional[str]:
        return self.field(EntryType.national_check_digit)

    @property
    def account_type(self) -> Optional[str]:
        return self.field(EntryType.account_type)

    @property
    def owner_account_type(self) -> Optional[str]:
        return self.field(EntryType.owner_account_number)

    @property
    def identification_number(self) -> Optional[str]:
        return self.field(EntryType.identification_number)

    def __str__(self) -> str:
        return self.value


__all__ = ["Bban"]
