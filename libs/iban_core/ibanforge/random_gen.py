"""
Random BBAN field generation for test data.

Every field draws its own sub-seed from the root source, in structure order,
whether or not the caller supplied that field. Under a fixed seed, supplying
one field therefore never changes the values generated for the others.
"""
from __future__ import annotations

import random
from typing import Dict, Mapping, Optional, Sequence

from .bban.entry import EntryType, FieldDescriptor
from .bban.structure import BbanStructure
from .country import CountryCode

_SUB_SEED_BITS = 63


class RandomGenerator:
    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        if rng is not None and seed is not None:
            raise ValueError("pass either seed or rng, not both")
        self._rng = rng if rng is not None else random.Random(seed)

    def _sub_random(self) -> random.Random:
        return random.Random(self._rng.getrandbits(_SUB_SEED_BITS))

    def field_value(self, descriptor: FieldDescriptor) -> str:
        return self._draw(descriptor, self._sub_random())

    @staticmethod
    def _draw(descriptor: FieldDescriptor, rng: random.Random) -> str:
        alphabet = descriptor.character_class.alphabet
        return "".join(rng.choice(alphabet) for _ in range(descriptor.length))

    def fill(
        self,
        structure: BbanStructure,
        supplied: Optional[Mapping[EntryType, Optional[str]]] = None,
    ) -> Dict[EntryType, str]:
        """Value for every field of ``structure``; supplied values are kept as-is."""
        supplied = supplied or {}
        out: Dict[EntryType, str] = {}
        for entry in structure.entries:
            sub = self._sub_random()
            given = supplied.get(entry.entry_type)
            out[entry.entry_type] = given if given is not None else self._draw(entry, sub)
        return out

    def random_country(self, countries: Sequence[CountryCode]) -> CountryCode:
        if not countries:
            raise ValueError("no countries to choose from")
        return self._rng.choice(list(countries))


__all__ = ["RandomGenerator"]
