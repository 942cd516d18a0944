"""
Payment systems for the shopping cart demo.

The shop's checkout code talks to a single `pay(amount)` interface. The old
payment system already speaks something close to it; the new one exposes
`process_payment` instead, so it is wrapped in an adapter.

Neither system moves money - they return a description of what they would do.
"""

import logging
from typing import Protocol

from shared.models import format_price

logger = logging.getLogger("payments")


class PaymentProcessor(Protocol):
    """What checkout expects to call."""

    def pay(self, amount: float) -> str:
        ...


class OldPaymentSystem:
    """Legacy payment system."""

    def process(self, amount: float) -> str:
        return f"Processing payment with old system: ${format_price(amount)}"

    def pay(self, amount: float) -> str:
        return self.process(amount)


class NewPaymentSystem:
    """New payment system with its own method name."""

    def process_payment(self, amount: float) -> str:
        return f"Processing payment with new system: ${format_price(amount)}"


class PaymentAdapter:
    """
    Adapts a system exposing `process_payment` to the `pay` interface.
    """

    def __init__(self, payment_system: NewPaymentSystem):
        self.payment_system = payment_system

    def pay(self, amount: float) -> str:
        logger.info(f"Adapter forwarding payment of {amount} to {type(self.payment_system).__name__}")
        return self.payment_system.process_payment(amount)


def get_payment_processor(name: str) -> PaymentProcessor:
    """
    Get a payment processor by name.

    Args:
        name: "old" or "new"

    Returns:
        An object with a pay(amount) method

    Raises:
        ValueError: If the system name is not recognized
    """
    if name == "old":
        return OldPaymentSystem()
    elif name == "new":
        return PaymentAdapter(NewPaymentSystem())
    else:
        raise ValueError(f"Unknown payment system: {name}")
