"""Shared fixtures for shift-rotation tests."""

import pytest
from datetime import date

from shift_rotation.catalog import TemplateCatalog
from shift_rotation.resolver import ShiftResolver
from shift_rotation.store import RosterStore
from shift_rotation.weeks import WeekIndexer

EPOCH = date(2025, 12, 29)  # Monday, week index 0


@pytest.fixture
def catalog() -> TemplateCatalog:
    """The built-in 7-template catalog."""
    return TemplateCatalog.default()


@pytest.fixture
def indexer() -> WeekIndexer:
    """Indexer anchored at the 2025-12-29 epoch."""
    return WeekIndexer(EPOCH)


@pytest.fixture
def store(indexer: WeekIndexer) -> RosterStore:
    """Store with three employees on base templates 1, 2 and 3."""
    s = RosterStore(indexer)
    s.add_employee("Ana López", 1, employee_id="ana")
    s.add_employee("Alberto Ruiz", 2, employee_id="beto")
    s.add_employee("Carla Méndez", 3, employee_id="carla")
    return s


@pytest.fixture
def make_resolver(catalog: TemplateCatalog, indexer: WeekIndexer):
    """Build a resolver over the current snapshot of a store."""

    def _make(s: RosterStore) -> ShiftResolver:
        return ShiftResolver(catalog, indexer, s.snapshot())

    return _make


@pytest.fixture
def resolver(store: RosterStore, make_resolver) -> ShiftResolver:
    """Resolver over the three-employee store, no exceptions."""
    return make_resolver(store)
