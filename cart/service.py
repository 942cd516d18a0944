"""
Cart service - what the shop front talks to.

This service ties the three cart pieces together: the state store holds the
cart, the history manager keeps snapshots of it, and the notification hub
tells listeners when something is added.

Key points:
- The service never notifies anyone itself; the store does that on add
- Restoring feeds the snapshot back into the store, which is silent
- Restoring with no usable snapshot empties the cart
- Save and restore run under the store's lock, so they never interleave
  with an addition
"""

import logging
from typing import Optional, Union

from cart.history import HistoryManager, Snapshot, get_history_manager
from cart.notification_hub import Listener, NotificationHub, Subscription
from cart.state_store import StateStore, get_state_store
from shared.models import CartEntry, Computer

logger = logging.getLogger("cart_service")


class CartService:
    """
    Facade over the cart state, its history and its listeners.

    Example:
        service = CartService()
        service.add_listener(UserListener())

        service.add_to_cart(CartEntry(name="Computer 1", price=1000))
        service.save_cart_state()
        service.add_to_cart(CartEntry(name="Computer 2", price=1500))

        # Undo back to the last save
        service.restore_cart_state()
    """

    def __init__(
        self,
        state_store: Optional[StateStore] = None,
        history: Optional[HistoryManager] = None,
    ):
        """
        Initialize the cart service.

        Args:
            state_store: Store holding the cart. Defaults to the process-wide store.
            history: Snapshot history. Defaults to the process-wide history.
        """
        # Both define __len__, so an empty one is falsy
        self.state_store = state_store if state_store is not None else get_state_store()
        self.history = history if history is not None else get_history_manager()
        # Listeners must sit on the hub the store broadcasts through
        self.hub: NotificationHub = self.state_store.hub

    def add_to_cart(self, item: Union[CartEntry, Computer]) -> CartEntry:
        """
        Add an item to the cart.

        Catalog products are converted to cart entries first.

        Returns:
            The entry that was added
        """
        entry = item.to_entry() if isinstance(item, Computer) else item
        self.state_store.add_entry(entry)
        return entry

    def get_cart(self) -> list[CartEntry]:
        """Get the current cart contents."""
        return self.state_store.get_entries()

    def get_total(self) -> float:
        """Get the cart total."""
        return self.state_store.get_total()

    def save_cart_state(self) -> Snapshot:
        """Snapshot the current cart."""
        with self.state_store.lock:
            snapshot = self.history.save_state(self.state_store.get_entries())
        logger.info("Cart state saved")
        return snapshot

    def restore_cart_state(self, index: Optional[int] = None) -> list[CartEntry]:
        """
        Put a saved snapshot back into the cart.

        Args:
            index: Snapshot to restore. Defaults to the most recent one.

        Returns:
            The restored entries (empty if there was nothing to restore)
        """
        with self.state_store.lock:
            if index is None:
                index = self.history.latest_index()
            restored = self.history.restore_state(index)
            self.state_store.replace_entries(restored)
        logger.info("Cart state restored")
        return restored

    def add_listener(self, listener: Listener) -> Subscription:
        """Register a listener for cart changes."""
        return self.hub.add_listener(listener)

    def remove_listener(self, listener: Listener) -> bool:
        """Remove a listener's first registration."""
        return self.hub.remove_listener(listener)
