"""
Extension points: extra BBAN structures and national algorithms.

Providers and algorithms are registered explicitly on an ``ExtensionRegistry``
and copied into the live registries by ``apply()``, which runs once before the
first validation or generation. Registration order decides conflicts: the
last provider (or algorithm) for a country wins.

Structure files use the registry format strings, e.g.::

    countries:
      IQ:
        format: "4!a3!n12!n"
        entries: [bank_code, branch_code, account_number]
"""
from __future__ import annotations

import logging
import threading
from typing import Dict, List, Mapping, Optional, Protocol, runtime_checkable

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .bban.dsl import structure_from_format
from .bban.entry import EntryType
from .bban.structure import BbanStructure, StructureRegistry
from .country import CountryCode
from .errors import FormatViolation, IbanFormatError
from .national.base import NationalAlgorithm
from .national.registry import NationalAlgorithmRegistry

log = logging.getLogger("ibanforge.spi")


@runtime_checkable
class BbanStructureProvider(Protocol):
    def supports_country(self, country: CountryCode) -> bool: ...

    def for_country(self, country: CountryCode) -> Optional[BbanStructure]: ...

    def supported_countries(self) -> List[CountryCode]: ...


class StaticStructureProvider:
    """Provider backed by an in-memory mapping."""

    def __init__(self, structures: Mapping[CountryCode, BbanStructure], name: str = "static"):
        self.name = name
        self._structures = {CountryCode(c): s for c, s in structures.items()}

    def supports_country(self, country: CountryCode) -> bool:
        return country in self._structures

    def for_country(self, country: CountryCode) -> Optional[BbanStructure]:
        return self._structures.get(country)

    def supported_countries(self) -> List[CountryCode]:
        return sorted(self._structures, key=lambda c: c.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name}, {len(self._structures)} countries)"


# ----- YAML provider -----

class CountryStructureModel(BaseModel):
    format: str = Field(..., min_length=2, description="BBAN format string, e.g. 4!a6!n8!n")
    entries: List[EntryType] = Field(..., min_length=1)


class StructureDocument(BaseModel):
    version: int = 1
    countries: Dict[str, CountryStructureModel] = Field(default_factory=dict)

    @field_validator("countries")
    @classmethod
    def validate_countries(cls, v):
        for code in v:
            if len(code) != 2 or CountryCode.get_by_code(code) is None:
                raise ValueError(f"unknown country code: {code}")
        return v


class YamlStructureProvider(StaticStructureProvider):
    """Structures read from a YAML document (see module docstring)."""

    @classmethod
    def from_text(cls, text: str, name: str = "yaml") -> "YamlStructureProvider":
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise IbanFormatError(FormatViolation.STRUCTURE_FORMAT, f"Invalid structure document {name}: {e}") from e
        return cls(cls._parse(data, name), name=name)

    @classmethod
    def from_file(cls, path: str) -> "YamlStructureProvider":
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        return cls.from_text(text, name=str(path))

    @staticmethod
    def _parse(data, name: str) -> Dict[CountryCode, BbanStructure]:
        try:
            doc = StructureDocument.model_validate(data)
        except ValidationError as e:
            raise IbanFormatError(FormatViolation.STRUCTURE_FORMAT, f"Invalid structure document {name}: {e}") from e
        out: Dict[CountryCode, BbanStructure] = {}
        for code, item in doc.countries.items():
            out[CountryCode(code.upper())] = structure_from_format(item.format, item.entries)
        return out


# ----- Registry -----

class ExtensionRegistry:
    """
    Ordered set of structure providers and national algorithms.

    ``apply()`` is idempotent and thread-safe. Anything added after it ran is
    pushed to the live registries straight away.
    """

    def __init__(self, structures: StructureRegistry, algorithms: NationalAlgorithmRegistry):
        self._structures = structures
        self._algorithms = algorithms
        self._providers: List[BbanStructureProvider] = []
        self._extra_algorithms: List[NationalAlgorithm] = []
        self._applied = False
        self._lock = threading.Lock()

    @property
    def providers(self) -> List[BbanStructureProvider]:
        return list(self._providers)

    @property
    def applied(self) -> bool:
        return self._applied

    def add_provider(self, provider: BbanStructureProvider) -> None:
        if not isinstance(provider, BbanStructureProvider):
            raise TypeError(f"not a structure provider: {provider!r}")
        with self._lock:
            self._providers.append(provider)
            if self._applied:
                self._apply_provider(provider)

    def add_algorithm(self, algorithm: NationalAlgorithm) -> None:
        with self._lock:
            self._extra_algorithms.append(algorithm)
            if self._applied:
                self._algorithms.register(algorithm)

    def apply(self) -> None:
        if self._applied:
            return
        with self._lock:
            if self._applied:
                return
            for provider in self._providers:
                self._apply_provider(provider)
            for algorithm in self._extra_algorithms:
                self._algorithms.register(algorithm)
            self._applied = True

    def reset(self) -> None:
        with self._lock:
            self._providers = []
            self._extra_algorithms = []
            self._applied = False

    def _apply_provider(self, provider: BbanStructureProvider) -> None:
        countries = provider.supported_countries()
        for country in countries:
            structure = provider.for_country(country)
            if structure is not None:
                self._structures.register(country, structure)
        log.info("structure provider %r applied: %d countries", provider, len(countries))


__all__ = [
    "BbanStructureProvider",
    "StaticStructureProvider",
    "YamlStructureProvider",
    "StructureDocument",
    "CountryStructureModel",
    "ExtensionRegistry",
]
