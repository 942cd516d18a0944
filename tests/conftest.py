"""
Shared pytest fixtures for the shopping cart demo tests.

These fixtures provide fresh cart components and reset the process-wide
instances between tests.
"""

import pytest

from cart.history import HistoryManager, reset_history_manager
from cart.notification_hub import NotificationHub, reset_notification_hub
from cart.service import CartService
from cart.state_store import StateStore, reset_state_store
from shared.catalog import Catalog
from shared.listeners import RecordingListener
from shared.models import CartEntry


@pytest.fixture(autouse=True)
def reset_singletons():
    """Give every test its own process-wide hub, store and history."""
    hub = reset_notification_hub()
    reset_state_store(hub=hub)
    reset_history_manager()
    yield


@pytest.fixture
def hub() -> NotificationHub:
    """Fresh NotificationHub for each test."""
    return NotificationHub()


@pytest.fixture
def store(hub: NotificationHub) -> StateStore:
    """Fresh StateStore wired to the test's hub."""
    return StateStore(hub=hub)


@pytest.fixture
def history() -> HistoryManager:
    """Fresh HistoryManager for each test."""
    return HistoryManager()


@pytest.fixture
def service(store: StateStore, history: HistoryManager) -> CartService:
    """CartService over the test's own store and history."""
    return CartService(state_store=store, history=history)


@pytest.fixture
def catalog() -> Catalog:
    """Default catalog: Computer 1/2/3 at 1000/1500/2000."""
    return Catalog.default()


@pytest.fixture
def recorder() -> RecordingListener:
    """Fresh RecordingListener for each test."""
    return RecordingListener(name="recorder")


# =============================================================================
# Entry Fixtures
# =============================================================================

@pytest.fixture
def entry_a() -> CartEntry:
    return CartEntry(name="A", price=10)


@pytest.fixture
def entry_b() -> CartEntry:
    return CartEntry(name="B", price=20)


@pytest.fixture
def entry_c() -> CartEntry:
    return CartEntry(name="C", price=30)
