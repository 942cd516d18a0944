"""
Shared domain pieces for the shopping cart patterns demo.

This package contains what the cart core's collaborators use:
- Domain models (CartEntry, Computer prototype, display bridge)
- Product catalog
- Payment systems and the payment adapter
- Concrete cart-change listeners
"""

from shared.models import (
    CartEntry,
    Computer,
    ComputerDisplay,
    ProductDisplay,
)
from shared.catalog import Catalog, get_catalog
from shared.payments import (
    OldPaymentSystem,
    NewPaymentSystem,
    PaymentAdapter,
    get_payment_processor,
)
from shared.listeners import RecordingListener, UserListener

__all__ = [
    "CartEntry",
    "Computer",
    "ComputerDisplay",
    "ProductDisplay",
    "Catalog",
    "get_catalog",
    "OldPaymentSystem",
    "NewPaymentSystem",
    "PaymentAdapter",
    "get_payment_processor",
    "RecordingListener",
    "UserListener",
]
