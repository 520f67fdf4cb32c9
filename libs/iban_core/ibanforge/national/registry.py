from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List, Optional

from ..bban.value import Bban
from ..country import CountryCode
from ..errors import InvalidNationalCheckDigitError
from .algorithms import BUILT_IN_ALGORITHMS
from .base import NationalAlgorithm

log = logging.getLogger("ibanforge.national")


class NationalAlgorithmRegistry:
    """
    Country -> national check digit algorithm.

    Same lifecycle as ``StructureRegistry``: built-ins are loaded once on first
    use, explicit registrations override them, and the last registration for a
    country wins.
    """

    def __init__(self, builtins: Optional[Iterable[NationalAlgorithm]] = None):
        self._builtins = list(builtins) if builtins is not None else [cls() for cls in BUILT_IN_ALGORITHMS]
        self._algorithms: Dict[CountryCode, NationalAlgorithm] = {}
        self._initialized = False
        self._lock = threading.Lock()

    def ensure_initialized(self) -> None:
        if self._initialized:
            return
        with self._lock:
            if self._initialized:
                return
            merged = {a.country: a for a in self._builtins}
            merged.update(self._algorithms)
            self._algorithms = merged
            self._initialized = True
            log.debug("national algorithms loaded: %s", ",".join(sorted(c.value for c in merged)))

    def get(self, country: Optional[CountryCode]) -> Optional[NationalAlgorithm]:
        if country is None:
            return None
        self.ensure_initialized()
        return self._algorithms.get(country)

    def is_supported(self, country: Optional[CountryCode]) -> bool:
        return self.get(country) is not None

    def supported_countries(self) -> List[CountryCode]:
        self.ensure_initialized()
        return sorted(self._algorithms, key=lambda c: c.value)

    def register(self, algorithm: NationalAlgorithm) -> None:
        country = CountryCode(algorithm.country)
        if self._initialized:
            previous = self._algorithms.get(country)
        else:
            previous = self._algorithms.get(country) or next((a for a in self._builtins if a.country == country), None)
        if previous is not None and previous is not algorithm:
            log.info("national algorithm for %s replaced: %r -> %r", country.value, previous, algorithm)
        self._algorithms[country] = algorithm

    def check(self, bban: Bban) -> None:
        """Raise ``InvalidNationalCheckDigitError`` unless ``bban`` passes its country's rule.

        Countries without a registered algorithm pass.
        """
        algorithm = self.get(bban.country_code)
        if algorithm is None:
            return
        actual = algorithm.extract(bban)
        if not algorithm.validate(bban, actual):
            expected = algorithm.calculate(bban)
            raise InvalidNationalCheckDigitError(actual, expected, bban.country_code.value)

    def unregister(self, country: CountryCode) -> bool:
        self.ensure_initialized()
        return self._algorithms.pop(country, None) is not None

    def reset(self) -> None:
        with self._lock:
            self._algorithms = {}
            self._initialized = False


__all__ = ["NationalAlgorithmRegistry"]
