from __future__ import annotations

from typing import Callable, Optional

from ..bban.entry import EntryType
from ..bban.value import Bban
from ..country import CountryCode


class NationalAlgorithm:
    """
    Country-specific check digit rule embedded in a BBAN.

    ``calculate`` returns the check digit the BBAN should carry, or ``None``
    when no value can satisfy the rule (e.g. a MOD-11 remainder of 10).
    ``validate(b, calculate(b))`` holds whenever ``calculate`` returns a value.
    Implementations are stateless and safe to share between threads.
    """

    country: CountryCode

    def calculate(self, bban: Bban) -> Optional[str]:
        raise NotImplementedError

    def extract(self, bban: Bban) -> Optional[str]:
        """The check digit currently embedded in ``bban``."""
        return bban.national_check_digit

    def validate(self, bban: Bban, check_digit: Optional[str]) -> bool:
        if check_digit is None:
            return False
        expected = self.calculate(bban)
        return expected is not None and expected == check_digit

    def apply(self, bban: Bban) -> Bban:
        """Copy of ``bban`` carrying the calculated check digit (unchanged when none exists)."""
        check_digit = self.calculate(bban)
        if check_digit is None:
            return bban
        return self.embed(bban, check_digit)

    def embed(self, bban: Bban, check_digit: str) -> Bban:
        """Write ``check_digit`` into the layout; a layout without the entry is returned as is."""
        if bban.structure.entry(EntryType.national_check_digit) is None:
            return bban
        return bban.replace(EntryType.national_check_digit, check_digit)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.country.value})"


class FunctionAlgorithm(NationalAlgorithm):
    """Open extension slot: a national rule made of plain callables."""

    def __init__(
        self,
        country: CountryCode,
        calculate: Callable[[Bban], Optional[str]],
        validate: Optional[Callable[[Bban, Optional[str]], bool]] = None,
        extract: Optional[Callable[[Bban], Optional[str]]] = None,
        embed: Optional[Callable[[Bban, str], Bban]] = None,
    ):
        self.country = CountryCode(country)
        self._calculate = calculate
        self._validate = validate
        self._extract = extract
        self._embed = embed

    def calculate(self, bban: Bban) -> Optional[str]:
        return self._calculate(bban)

    def extract(self, bban: Bban) -> Optional[str]:
        if self._extract is not None:
            return self._extract(bban)
        return super().extract(bban)

    def embed(self, bban: Bban, check_digit: str) -> Bban:
        if self._embed is not None:
            return self._embed(bban, check_digit)
        return super().embed(bban, check_digit)

    def validate(self, bban: Bban, check_digit: Optional[str]) -> bool:
        if self._validate is not None:
            return bool(self._validate(bban, check_digit))
        return super().validate(bban, check_digit)


def digits_only(text: Optional[str]) -> bool:
    return bool(text) and all("0" <= ch <= "9" for ch in text)


def weighted_sum(digits: str, weights) -> int:
    return sum((ord(ch) - 48) * weights[i % len(weights)] for i, ch in enumerate(digits))


__all__ = ["NationalAlgorithm", "FunctionAlgorithm", "digits_only", "weighted_sum"]
