"""
Built-in national check digit algorithms.

Each class implements one country's published rule. Input fields are read
from the ``Bban`` by entry type so that the rule follows the registered
layout rather than hard-coded offsets.
"""
from __future__ import annotations

from typing import List, Optional

from ..bban.entry import EntryType
from ..bban.value import Bban
from ..checkdigit.iso7064 import (
    french_rib_numeric,
    letters_to_digits,
    mod97_10,
    mod97_10_check_digits,
    rib_check_digits,
)
from ..country import CountryCode
from .base import NationalAlgorithm, digits_only, weighted_sum


def _join(*parts: Optional[str]) -> Optional[str]:
    if any(p is None for p in parts):
        return None
    return "".join(parts)  # type: ignore[arg-type]


class BeNationalCheckDigit(NationalAlgorithm):
    """Belgium: (bank + account) mod 97, with 0 written as 97."""

    country = CountryCode.BE

    def calculate(self, bban: Bban) -> Optional[str]:
        data = _join(bban.bank_code, bban.account_number)
        if not digits_only(data):
            return None
        remainder = mod97_10(data)
        return f"{97 if remainder == 0 else remainder:02d}"


class EsNationalCheckDigit(NationalAlgorithm):
    """
    Spain: two MOD-11 digits, the first over "00" + bank + branch, the second
    over the account number.
    """

    country = CountryCode.ES
    WEIGHTS = (1, 2, 4, 8, 5, 10, 9, 7, 3, 6)

    @classmethod
    def _digit(cls, digits: str) -> int:
        remainder = weighted_sum(digits, cls.WEIGHTS) % 11
        cd = 0 if remainder == 0 else 11 - remainder
        return 1 if cd == 10 else cd

    def calculate(self, bban: Bban) -> Optional[str]:
        first = _join("00", bban.bank_code, bban.branch_code)
        second = bban.account_number
        if not digits_only(first) or not digits_only(second):
            return None
        return f"{self._digit(first)}{self._digit(second)}"


class FrNationalCheckDigit(NationalAlgorithm):
    """France: RIB key over bank + branch + account, letters transcoded."""

    country = CountryCode.FR

    def calculate(self, bban: Bban) -> Optional[str]:
        rib = _join(bban.bank_code, bban.branch_code, bban.account_number)
        if rib is None:
            return None
        return rib_check_digits(french_rib_numeric(rib))


class TnNationalCheckDigit(FrNationalCheckDigit):
    """Tunisia uses the French RIB key over a fully numeric RIB."""

    country = CountryCode.TN


class ItNationalCheckDigit(NationalAlgorithm):
    """Italy: CIN letter from odd/even position values, sum mod 26."""

    country = CountryCode.IT
    # value for A..Z; digits 0..9 share the values of A..J
    ODD_VALUES = (1, 0, 5, 7, 9, 13, 15, 17, 19, 21, 2, 4, 18, 20, 11, 3, 6, 8, 12, 14, 16, 10, 22, 25, 24, 23)

    @classmethod
    def _odd(cls, ch: str) -> int:
        if "0" <= ch <= "9":
            return cls.ODD_VALUES[ord(ch) - 48]
        if "A" <= ch <= "Z":
            return cls.ODD_VALUES[ord(ch) - 65]
        return 0

    @staticmethod
    def _even(ch: str) -> int:
        if "0" <= ch <= "9":
            return ord(ch) - 48
        return ord(ch) - 65 + 10

    def calculate(self, bban: Bban) -> Optional[str]:
        data = _join(bban.bank_code, bban.branch_code, bban.account_number)
        if data is None:
            return None
        total = 0
        for i, ch in enumerate(data):
            # positions are 1-based: index 0 is an odd position
            total += self._odd(ch) if i % 2 == 0 else self._even(ch)
        return chr(65 + total % 26)


class Mod97NationalCheckDigit(NationalAlgorithm):
    """
    ISO 7064 MOD 97-10 over the whole BBAN: valid iff the remainder is 1.

    Letters (MK accounts are alphanumeric) count as 10-35, as in the IBAN
    check digit itself.
    """

    def validate(self, bban: Bban, check_digit: Optional[str]) -> bool:
        if check_digit is None or bban.national_check_digit is None:
            return False
        try:
            candidate = self.embed(bban, check_digit)
        except ValueError:
            return False
        return mod97_10(letters_to_digits(candidate.value)) == 1

    def calculate(self, bban: Bban) -> Optional[str]:
        entry = bban.structure.entry(EntryType.national_check_digit)
        if entry is None or entry.length != 2:
            return None
        if bban.structure.entries[-1] is entry:
            return mod97_10_check_digits(letters_to_digits(bban.value[:-2]))
        # check digit not trailing: fall back to trying every value
        for n in range(100):
            candidate = f"{n:02d}"
            if mod97_10(letters_to_digits(self.embed(bban, candidate).value)) == 1:
                return candidate
        return None


class BaNationalCheckDigit(Mod97NationalCheckDigit):
    country = CountryCode.BA


class MeNationalCheckDigit(Mod97NationalCheckDigit):
    country = CountryCode.ME


class MkNationalCheckDigit(Mod97NationalCheckDigit):
    country = CountryCode.MK


class PtNationalCheckDigit(Mod97NationalCheckDigit):
    country = CountryCode.PT


class RsNationalCheckDigit(Mod97NationalCheckDigit):
    country = CountryCode.RS


class SiNationalCheckDigit(Mod97NationalCheckDigit):
    country = CountryCode.SI


class FiNationalCheckDigit(NationalAlgorithm):
    """Finland: Luhn-style weights 2,1 from the right, products digit-summed."""

    country = CountryCode.FI
    WEIGHTS = (2, 1, 2, 1)

    def calculate(self, bban: Bban) -> Optional[str]:
        data = _join(bban.bank_code, bban.account_number)
        if not digits_only(data):
            return None
        total = 0
        for i, ch in enumerate(reversed(data)):
            product = (ord(ch) - 48) * self.WEIGHTS[i % 4]
            if product > 9:
                product = product // 10 + product % 10
            total += product
        return str((10 - total % 10) % 10)


class NoNationalCheckDigit(NationalAlgorithm):
    """Norway: MOD-11 over bank + account with weights 5,4,3,2,7,6,5,4,3,2."""

    country = CountryCode.NO
    WEIGHTS = (5, 4, 3, 2, 7, 6, 5, 4, 3, 2)

    def calculate(self, bban: Bban) -> Optional[str]:
        data = _join(bban.bank_code, bban.account_number)
        if not digits_only(data) or len(data) != len(self.WEIGHTS):
            return None
        remainder = weighted_sum(data, self.WEIGHTS) % 11
        expected = 0 if remainder == 0 else 11 - remainder
        # remainder 1 leaves no valid single digit; such accounts are never issued
        return None if expected == 10 else str(expected)


def _mod11_complement(digits: str, weights) -> Optional[str]:
    """Digit ``d`` (weight 1, appended) making the weighted sum divisible by 11."""
    d = (-weighted_sum(digits, weights)) % 11
    return None if d == 10 else str(d)


class NlNationalCheckDigit(NationalAlgorithm):
    """
    Netherlands: the account number's weighted sum (10..1) is divisible by 11.
    The check digit is the last account digit. Former Postbank accounts
    (leading "000") carry no check and always pass.
    """

    country = CountryCode.NL
    WEIGHTS = (10, 9, 8, 7, 6, 5, 4, 3, 2, 1)

    @staticmethod
    def _is_postbank(account: str) -> bool:
        return account.startswith("000")

    def extract(self, bban: Bban) -> Optional[str]:
        account = bban.account_number
        return account[-1:] if account else None

    def embed(self, bban: Bban, check_digit: str) -> Bban:
        account = bban.account_number or ""
        return bban.replace(EntryType.account_number, account[:-1] + check_digit)

    def calculate(self, bban: Bban) -> Optional[str]:
        account = bban.account_number
        if not digits_only(account) or len(account) != len(self.WEIGHTS):
            return None
        if self._is_postbank(account):
            return account[-1]
        return _mod11_complement(account[:-1], self.WEIGHTS[:-1])

    def validate(self, bban: Bban, check_digit: Optional[str]) -> bool:
        account = bban.account_number
        if account is None or check_digit is None or len(check_digit) != 1:
            return False
        if self._is_postbank(account):
            return True
        candidate = account[:-1] + check_digit
        if not digits_only(candidate) or len(candidate) != len(self.WEIGHTS):
            return False
        return weighted_sum(candidate, self.WEIGHTS) % 11 == 0


class SkNationalCheckDigit(NationalAlgorithm):
    """
    Slovakia: the 16-digit account is a 6-digit prefix and a 10-digit basic
    number, each independently MOD-11 checked. The check digit pair is the
    last digit of each part.
    """

    country = CountryCode.SK
    PREFIX_WEIGHTS = (10, 5, 8, 4, 2, 1)
    NUMBER_WEIGHTS = (6, 3, 7, 9, 10, 5, 8, 4, 2, 1)
    PREFIX_LENGTH = 6

    def _parts(self, account: str) -> List[str]:
        return [account[: self.PREFIX_LENGTH], account[self.PREFIX_LENGTH:]]

    def extract(self, bban: Bban) -> Optional[str]:
        account = bban.account_number
        if account is None or len(account) != 16:
            return None
        prefix, number = self._parts(account)
        return prefix[-1] + number[-1]

    def embed(self, bban: Bban, check_digit: str) -> Bban:
        prefix, number = self._parts(bban.account_number or "")
        return bban.replace(EntryType.account_number, prefix[:-1] + check_digit[0] + number[:-1] + check_digit[1])

    def calculate(self, bban: Bban) -> Optional[str]:
        account = bban.account_number
        if not digits_only(account) or len(account) != 16:
            return None
        prefix, number = self._parts(account)
        first = _mod11_complement(prefix[:-1], self.PREFIX_WEIGHTS[:-1])
        second = _mod11_complement(number[:-1], self.NUMBER_WEIGHTS[:-1])
        if first is None or second is None:
            return None
        return first + second

    def validate(self, bban: Bban, check_digit: Optional[str]) -> bool:
        account = bban.account_number
        if account is None or check_digit is None or len(check_digit) != 2 or len(account) != 16:
            return False
        prefix, number = self._parts(account)
        prefix = prefix[:-1] + check_digit[0]
        number = number[:-1] + check_digit[1]
        if not digits_only(prefix) or not digits_only(number):
            return False
        if weighted_sum(prefix, self.PREFIX_WEIGHTS) % 11 != 0:
            return False
        return weighted_sum(number, self.NUMBER_WEIGHTS) % 11 == 0


BUILT_IN_ALGORITHMS = (
    BeNationalCheckDigit,
    EsNationalCheckDigit,
    BaNationalCheckDigit,
    FiNationalCheckDigit,
    FrNationalCheckDigit,
    ItNationalCheckDigit,
    MkNationalCheckDigit,
    MeNationalCheckDigit,
    NlNationalCheckDigit,
    NoNationalCheckDigit,
    PtNationalCheckDigit,
    RsNationalCheckDigit,
    SkNationalCheckDigit,
    SiNationalCheckDigit,
    TnNationalCheckDigit,
)


__all__ = [
    "BeNationalCheckDigit",
    "EsNationalCheckDigit",
    "FrNationalCheckDigit",
    "TnNationalCheckDigit",
    "ItNationalCheckDigit",
    "Mod97NationalCheckDigit",
    "BaNationalCheckDigit",
    "MeNationalCheckDigit",
    "MkNationalCheckDigit",
    "PtNationalCheckDigit",
    "RsNationalCheckDigit",
    "SiNationalCheckDigit",
    "FiNationalCheckDigit",
    "NoNationalCheckDigit",
    "NlNationalCheckDigit",
    "SkNationalCheckDigit",
    "BUILT_IN_ALGORITHMS",
]
