from .entry import (
    EntryType,
    CharacterClass,
    FieldDescriptor,
    bank_code,
    branch_code,
    account_number,
    national_check_digit,
    account_type,
    owner_account_number,
    identification_number,
)
from .structure import BbanStructure, BUILT_IN_STRUCTURES, StructureRegistry
from .validator import validate_bban, validate_bban_entry, split_bban, extract_entry
from .dsl import FormatToken, parse_format, format_of, structure_from_format
from .value import Bban

__all__ = [
    "EntryType",
    "CharacterClass",
    "FieldDescriptor",
    "bank_code",
    "branch_code",
    "account_number",
    "national_check_digit",
    "account_type",
    "owner_account_number",
    "identification_number",
    "BbanStructure",
    "BUILT_IN_STRUCTURES",
    "StructureRegistry",
    "validate_bban",
    "validate_bban_entry",
    "split_bban",
    "extract_entry",
    "FormatToken",
    "parse_format",
    "format_of",
    "structure_from_format",
    "Bban",
]
