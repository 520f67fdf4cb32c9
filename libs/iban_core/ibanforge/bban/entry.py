from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class EntryType(str, Enum):
    """Role of a positional BBAN field."""
    bank_code = "bank_code"
    branch_code = "branch_code"
    account_number = "account_number"
    national_check_digit = "national_check_digit"
    account_type = "account_type"  # cheque account, savings account etc
    owner_account_number = "owner_account_number"  # "1", "2" etc
    identification_number = "identification_number"


class CharacterClass(str, Enum):
    n = "n"  # digits 0-9
    a = "a"  # upper case letters A-Z
    c = "c"  # upper case letters and digits

    def matches(self, ch: str) -> bool:
        if self is CharacterClass.n:
            return "0" <= ch <= "9"
        if self is CharacterClass.a:
            return "A" <= ch <= "Z"
        return "0" <= ch <= "9" or "A" <= ch <= "Z"

    @property
    def alphabet(self) -> str:
        return _ALPHABETS[self.value]


_DIGITS = "0123456789"
_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_ALPHABETS = {"n": _DIGITS, "a": _UPPER, "c": _DIGITS + _UPPER}


@dataclass(frozen=True)
class FieldDescriptor:
    entry_type: EntryType
    character_class: CharacterClass
    length: int

    def __post_init__(self) -> None:
        if not isinstance(self.length, int) or isinstance(self.length, bool) or self.length < 0:
            raise ValueError(f"field length must be a non-negative int, got {self.length!r}")

    def matches(self, value: str) -> bool:
        return len(value) == self.length and all(self.character_class.matches(ch) for ch in value)


CharClassLike = Union[CharacterClass, str]


def _make(entry_type: EntryType, length: int, character_class: CharClassLike) -> FieldDescriptor:
    return FieldDescriptor(entry_type, CharacterClass(character_class), length)


def bank_code(length: int, character_class: CharClassLike) -> FieldDescriptor:
    return _make(EntryType.bank_code, length, character_class)


def branch_code(length: int, character_class: CharClassLike) -> FieldDescriptor:
    return _make(EntryType.branch_code, length, character_class)


def account_number(length: int, character_class: CharClassLike) -> FieldDescriptor:
    return _make(EntryType.account_number, length, character_class)


def national_check_digit(length: int, character_class: CharClassLike) -> FieldDescriptor:
    return _make(EntryType.national_check_digit, length, character_class)


def account_type(length: int, character_class: CharClassLike) -> FieldDescriptor:
    return _make(EntryType.account_type, length, character_class)


def owner_account_number(length: int, character_class: CharClassLike) -> FieldDescriptor:
    return _make(EntryType.owner_account_number, length, character_class)


def identification_number(length: int, character_class: CharClassLike) -> FieldDescriptor:
    return _make(EntryType.identification_number, length, character_class)


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
]
