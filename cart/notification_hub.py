"""
In-memory notification hub for cart changes.

This module provides the observer side of the cart: listeners register with the
hub, and the state store asks the hub to broadcast a text message every time
the cart changes.

Design decisions:
- Synchronous delivery, in registration order
- Delivery iterates over a copy of the registry, so a listener may
  unsubscribe itself while being notified
- Registration returns a Subscription handle; removal by listener identity
  is still supported
- Duplicate registrations are allowed and receive the message once each
- A listener that raises is logged and skipped; the rest still get the message
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable
from uuid import uuid4

logger = logging.getLogger("notification_hub")


@runtime_checkable
class Listener(Protocol):
    """Anything that wants to hear about cart changes."""

    def notify(self, message: str) -> None:
        ...


@dataclass(frozen=True)
class Subscription:
    """
    Handle for one registration of a listener.

    Returned by NotificationHub.add_listener and accepted by
    NotificationHub.unsubscribe. Two registrations of the same listener get
    two distinct handles.
    """
    listener: Listener = field(compare=False)
    token: str = field(default_factory=lambda: str(uuid4()))

    def __str__(self) -> str:
        return f"Subscription({self.token[:8]}, listener={type(self.listener).__name__})"


class NotificationHub:
    """
    One-to-many fan-out of cart change messages.

    Example usage:
        hub = NotificationHub()

        subscription = hub.add_listener(user)
        hub.notify_all("Item added to cart: Computer 1")

        hub.unsubscribe(subscription)
    """

    def __init__(self):
        """Initialize the hub with an empty registry."""
        self._subscriptions: list[Subscription] = []

        # Optional: track all messages for debugging
        self._message_log: list[str] = []
        self._log_messages: bool = True

    def add_listener(self, listener: Listener) -> Subscription:
        """
        Register a listener.

        Args:
            listener: Object with a notify(message) method

        Returns:
            A Subscription handle for this registration

        Note: The same listener can be registered multiple times (will be notified multiple times).
        """
        subscription = Subscription(listener=listener)
        self._subscriptions.append(subscription)
        logger.debug(f"Registered {subscription}")
        return subscription

    def remove_listener(self, listener: Listener) -> bool:
        """
        Remove the first registration of a listener, matched by identity.

        Returns:
            True if a registration was removed, False if the listener wasn't registered
        """
        for position, subscription in enumerate(self._subscriptions):
            if subscription.listener is listener:
                del self._subscriptions[position]
                logger.debug(f"Removed {subscription}")
                return True
        return False

    def unsubscribe(self, subscription: Subscription) -> bool:
        """
        Remove exactly the registration a handle refers to.

        Returns:
            True if the registration was found and removed, False otherwise
        """
        for position, existing in enumerate(self._subscriptions):
            if existing.token == subscription.token:
                del self._subscriptions[position]
                logger.debug(f"Unsubscribed {subscription}")
                return True
        return False

    def notify_all(self, message: str) -> int:
        """
        Deliver a message to every registered listener.

        Args:
            message: The text to deliver

        Returns:
            Number of listeners that were invoked

        Note: Listeners are called synchronously in the order they registered.
        If a listener raises an exception, it's logged but doesn't stop the others.
        """
        if self._log_messages:
            self._message_log.append(message)

        logger.info(f"Broadcasting: {message}")

        listeners_called = 0
        for subscription in list(self._subscriptions):
            listeners_called += 1
            try:
                subscription.listener.notify(message)
            except Exception as e:
                logger.error(f"Listener {subscription.listener!r} raised exception for '{message}': {e}")

        if listeners_called == 0:
            logger.debug("No listeners registered")

        return listeners_called

    def get_listener_count(self) -> int:
        """Get the number of registrations (duplicates counted)."""
        return len(self._subscriptions)

    def get_message_log(self) -> list[str]:
        """Get the log of all broadcast messages."""
        return self._message_log.copy()

    def clear_message_log(self) -> None:
        """Clear the message log."""
        self._message_log.clear()

    def clear_listeners(self) -> None:
        """Remove all listeners (useful for testing)."""
        self._subscriptions.clear()

    def set_logging(self, enabled: bool) -> None:
        """Enable or disable message logging."""
        self._log_messages = enabled


# Module-level singleton for convenience
_default_hub: Optional[NotificationHub] = None


def get_notification_hub() -> NotificationHub:
    """Get the default notification hub singleton."""
    global _default_hub
    if _default_hub is None:
        _default_hub = NotificationHub()
    return _default_hub


def reset_notification_hub() -> NotificationHub:
    """Reset the default notification hub (useful for testing)."""
    global _default_hub
    _default_hub = NotificationHub()
    return _default_hub
