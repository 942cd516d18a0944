"""
Observable, snapshot-able shopping cart.

This package implements the cart core:
- StateStore holds the one cart and is the only thing that changes it
- HistoryManager keeps snapshots of the cart for undo
- NotificationHub tells registered listeners when the cart changes
- CartService puts the three together for the shop front
"""

from cart.notification_hub import (
    Listener,
    NotificationHub,
    Subscription,
    get_notification_hub,
    reset_notification_hub,
)
from cart.state_store import StateStore, get_state_store, reset_state_store
from cart.history import (
    HistoryManager,
    Snapshot,
    get_history_manager,
    reset_history_manager,
)
from cart.service import CartService

__all__ = [
    "Listener",
    "NotificationHub",
    "Subscription",
    "get_notification_hub",
    "reset_notification_hub",
    "StateStore",
    "get_state_store",
    "reset_state_store",
    "HistoryManager",
    "Snapshot",
    "get_history_manager",
    "reset_history_manager",
    "CartService",
]
