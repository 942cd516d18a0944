"""
Cart-change listeners for the demo.

These listeners react to messages broadcast by the notification hub. In a real
shop they would push a toast to the browser, send an email, and so on; here
they log what they receive and keep it for test assertions.

Design decisions:
- All deliveries are logged to console for visibility
- Listeners track received messages, optionally only the most recent ones
- Listener failures can be simulated for testing fault isolation
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

# Configure logging for listeners
logger = logging.getLogger("listeners")
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter(
    "%(asctime)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S"
))
logger.addHandler(handler)
logger.setLevel(logging.INFO)


@dataclass
class ReceivedMessage:
    """A message as received by a listener."""
    message: str
    listener: str
    timestamp: datetime = field(default_factory=datetime.utcnow)

    def __str__(self) -> str:
        return f"{self.listener} <- {self.message}"


class RecordingListener:
    """
    Listener that remembers the messages it was notified with.

    Can simulate a broken listener by raising on every notification.
    """

    def __init__(self, name: str = "recorder", fail: bool = False, max_messages: Optional[int] = None):
        """
        Initialize the listener.

        Args:
            name: Label used in logs and recorded messages
            fail: Raise RuntimeError on every notification, for testing
            max_messages: Keep only this many of the most recent messages.
                          None keeps everything.
        """
        self.name = name
        self.fail = fail
        self.received: deque[ReceivedMessage] = deque(maxlen=max_messages)

    def notify(self, message: str) -> None:
        if self.fail:
            raise RuntimeError(f"Simulated failure in listener '{self.name}'")
        self.received.append(ReceivedMessage(message=message, listener=self.name))
        logger.debug(f"[{self.name}] {message}")

    @property
    def messages(self) -> list[str]:
        """Message texts, in the order received."""
        return [m.message for m in self.received]

    def get_received_count(self) -> int:
        """Get the number of messages held (for testing)."""
        return len(self.received)

    def __repr__(self) -> str:
        return f"RecordingListener(name={self.name!r})"


class UserListener(RecordingListener):
    """
    A shopper watching their cart.

    Logs each notification the way the shop front would show it.
    """

    def __init__(self, name: str = "user", max_messages: Optional[int] = None):
        super().__init__(name=name, max_messages=max_messages)

    def notify(self, message: str) -> None:
        super().notify(message)
        logger.info(f"User notified: {message}")
