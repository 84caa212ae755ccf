"""Shared fixtures."""
import pytest

from verticals.outdoor import seed
from verticals.outdoor.data_service import DataService
from verticals.outdoor.memory_store import MemoryStore
from verticals.outdoor.state import AppState, StateManager


class Deferred(list):
    """Stands in for BackgroundTasks.add_task; records the deferred writes."""

    def __call__(self, func, *args):
        self.append((func.__name__, args))

    async def flush(self, manager: StateManager):
        for name, args in self:
            await getattr(manager.service, name)(*args)


@pytest.fixture
def deferred():
    return Deferred()


@pytest.fixture
def manager():
    m = StateManager(DataService(MemoryStore.seeded()))
    m.state = AppState(
        brands=seed.default_brands(),
        products=seed.default_products(),
        transactions=seed.default_transactions(),
        bindings={},
    )
    return m
