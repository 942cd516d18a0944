"""
The single source of truth for what is in the shopping cart.

Design decisions:
- One logical cart per process via module-level instance caching
  (get_state_store); tests and the API can still build their own StateStore
- The store is the only thing that mutates the entry list
- Adding an entry broadcasts a message through the notification hub;
  replacing the entries wholesale (undo/restore) is silent
- Reads hand out a copy so callers can't bypass the store
- One reentrant lock covers each mutation together with its broadcast, so
  listeners hear additions in cart order even when the API serves requests
  from several worker threads
"""

import logging
import threading
from typing import Iterable, Optional

from cart.notification_hub import NotificationHub, get_notification_hub
from shared.models import CartEntry

logger = logging.getLogger("state_store")


class StateStore:
    """
    Ordered list of cart entries.

    Insertion order is kept and duplicates are allowed.

    Example:
        store = StateStore(hub=NotificationHub())
        store.add_entry(CartEntry(name="Computer 1", price=1000))
        store.get_entries()  # [CartEntry(name='Computer 1', price=1000.0, ...)]
    """

    def __init__(self, hub: Optional[NotificationHub] = None):
        """
        Initialize an empty store.

        Args:
            hub: Notification hub to broadcast changes through.
                 Defaults to the process-wide hub.
        """
        self.hub = hub or get_notification_hub()
        self._entries: list[CartEntry] = []
        # Reentrant: a listener may read the cart while being notified
        self.lock = threading.RLock()

    def add_entry(self, entry: CartEntry) -> None:
        """
        Append an entry and tell the listeners about it.
        """
        with self.lock:
            self._entries.append(entry)
            logger.info(f"Entry added: {entry.name} ({entry.price}), cart size {len(self._entries)}")
            self.hub.notify_all(f"Item added to cart: {entry.name}")

    def get_entries(self) -> list[CartEntry]:
        """Get the current entries, as a new list."""
        with self.lock:
            return list(self._entries)

    def replace_entries(self, entries: Iterable[CartEntry]) -> None:
        """
        Replace the whole cart.

        Used when restoring a snapshot. No notification is sent.
        """
        with self.lock:
            self._entries = list(entries)
            logger.info(f"Entries replaced, cart size {len(self._entries)}")

    def clear(self) -> None:
        """Empty the cart (silently)."""
        with self.lock:
            self._entries.clear()

    def get_total(self) -> float:
        """Sum of all entry prices."""
        with self.lock:
            return sum(entry.price for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)


# Module-level singleton: first use creates the cart, everyone after shares it
_default_store: Optional[StateStore] = None


def get_state_store() -> StateStore:
    """Get the default state store singleton."""
    global _default_store
    if _default_store is None:
        _default_store = StateStore()
    return _default_store


def reset_state_store(hub: Optional[NotificationHub] = None) -> StateStore:
    """Reset the default state store (useful for testing)."""
    global _default_store
    _default_store = StateStore(hub=hub)
    return _default_store
