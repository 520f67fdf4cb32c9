from __future__ import annotations

import threading
from collections.abc import Mapping

from ibanforge import validation
from ibanforge.bban import BUILT_IN_STRUCTURES, BbanStructure, StructureRegistry, account_number, bank_code, branch_code
from ibanforge.country import CountryCode
from ibanforge.national import BUILT_IN_ALGORITHMS, NationalAlgorithmRegistry
from ibanforge.spi import StaticStructureProvider

THREADS = 16
LIBYA = BbanStructure(bank_code(3, "n"), branch_code(3, "n"), account_number(15, "n"))
LIBYA_IBAN = "LY83002048000020100120361"


class CountingTable(Mapping):
    """Built-in table that records how often it is copied into a registry."""

    def __init__(self, data):
        self._data = dict(data)
        self.copies = 0
        self._lock = threading.Lock()

    def keys(self):
        with self._lock:
            self.copies += 1
        return self._data.keys()

    def __getitem__(self, key):
        return self._data[key]

    def __iter__(self):
        return iter(self._data)

    def __len__(self):
        return len(self._data)


class CountingProvider(StaticStructureProvider):
    def __init__(self, structures):
        super().__init__(structures, name="counting")
        self.calls = 0
        self._lock = threading.Lock()

    def supported_countries(self):
        with self._lock:
            self.calls += 1
        return super().supported_countries()


def _run_together(fn):
    barrier = threading.Barrier(THREADS)
    results = [None] * THREADS
    errors = []

    def worker(i):
        barrier.wait()
        try:
            results[i] = fn()
        except Exception as e:  # surfaced by the assertion below
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(THREADS)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []
    return results


def test_structure_registry_initializes_once():
    table = CountingTable(BUILT_IN_STRUCTURES)
    registry = StructureRegistry(table)
    results = _run_together(registry.supported_countries)
    assert table.copies == 1
    assert all(r == results[0] for r in results)
    assert len(results[0]) == len(BUILT_IN_STRUCTURES)


def test_national_registry_initializes_once():
    registry = NationalAlgorithmRegistry()
    results = _run_together(registry.supported_countries)
    assert all(r == results[0] for r in results)
    assert len(results[0]) == len(BUILT_IN_ALGORITHMS)


def test_default_pipeline_applies_providers_once():
    provider = CountingProvider({CountryCode.LY: LIBYA})
    validation.register_provider(provider)
    results = _run_together(lambda: validation.is_valid(LIBYA_IBAN))
    assert all(results)
    assert provider.calls == 1
    pipelines = _run_together(validation.default_pipeline)
    assert all(p is pipelines[0] for p in pipelines)
