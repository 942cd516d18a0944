"""
Domain models for the shopping cart patterns demo.

These models represent the products a shop sells and the entries that end
up in a customer's cart.

Design decisions:
- Using Pydantic for validation and serialization
- CartEntry is frozen: entries are values, compared by content, never mutated
- Computer is the prototype the catalog clones its products from
- Product display goes through a bridge so the rendering can vary
  independently of the product abstraction
"""

from abc import ABC, abstractmethod
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


# =============================================================================
# Cart Entry
# =============================================================================

class CartEntry(BaseModel):
    """
    A single line item in the shopping cart.

    Immutable value type: two entries with the same name and price are equal,
    and duplicates in a cart are perfectly fine.
    """
    name: str = Field(..., description="Product display name")
    price: float = Field(..., description="Price at the time it was added")
    product_id: Optional[str] = Field(
        default=None,
        description="Reference to the catalog product, if it came from one"
    )

    model_config = ConfigDict(frozen=True)

    def clone(self) -> "CartEntry":
        """Return an independent copy of this entry."""
        return self.model_copy()


# =============================================================================
# Prototype
# =============================================================================

class Computer:
    """
    A computer for sale - the prototype products are cloned from.

    The catalog never builds products field by field; it clones a prototype
    and adjusts what differs.
    """

    def __init__(self, name: str, price: float, product_id: Optional[str] = None):
        self.name = name
        self.price = price
        self.product_id = product_id

    def clone(self) -> "Computer":
        """Create a new Computer with the same name, price and id."""
        return Computer(self.name, self.price, self.product_id)

    def to_entry(self) -> CartEntry:
        """Convert to a cart entry."""
        return CartEntry(name=self.name, price=self.price, product_id=self.product_id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Computer):
            return NotImplemented
        return (
            self.name == other.name
            and self.price == other.price
            and self.product_id == other.product_id
        )

    def __hash__(self) -> int:
        return hash((self.name, self.price, self.product_id))

    def __repr__(self) -> str:
        return f"Computer(name={self.name!r}, price={self.price!r}, product_id={self.product_id!r})"


# =============================================================================
# Bridge - product display
# =============================================================================

def format_price(price: float) -> str:
    """Render a price without a trailing .0 for whole amounts."""
    if float(price).is_integer():
        return str(int(price))
    return f"{price:.2f}"


class DisplayImplementation(ABC):
    """Implementation side of the display bridge."""

    @abstractmethod
    def display_details(self) -> str:
        """Render the product details."""


class ComputerDisplay(DisplayImplementation):
    """Renders a product as a one-line text summary."""

    def __init__(self, name: str, price: float):
        self.name = name
        self.price = price

    def display_details(self) -> str:
        return f"Product: {self.name}, Price: ${format_price(self.price)}"


class ProductDisplay:
    """
    Abstraction side of the display bridge.

    Callers only ever ask for display(); which implementation does the
    rendering is decided when the abstraction is built.
    """

    def __init__(self, implementation: DisplayImplementation):
        self.implementation = implementation

    def display(self) -> str:
        return self.implementation.display_details()

    @classmethod
    def for_entry(cls, entry: CartEntry) -> "ProductDisplay":
        """Build a display for a cart entry."""
        return cls(ComputerDisplay(entry.name, entry.price))

    @classmethod
    def for_computer(cls, computer: Computer) -> "ProductDisplay":
        """Build a display for a catalog product."""
        return cls(ComputerDisplay(computer.name, computer.price))
