"""
Request and response models for the cart API.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import CartEntry


class AddItemRequest(BaseModel):
    """
    Request to add an item to the cart.

    Either reference a catalog product by id, or give a name and price
    for an ad-hoc entry.
    """
    product_id: Optional[str] = Field(default=None, description="Catalog product to add")
    name: Optional[str] = Field(default=None, description="Entry name (ad-hoc item)")
    price: Optional[float] = Field(default=None, description="Entry price (ad-hoc item)")


class ProductView(BaseModel):
    """A catalog product as the shop front shows it."""
    product_id: str
    name: str
    price: float
    display: str


class CartView(BaseModel):
    """Current cart contents."""
    entries: list[CartEntry]
    display: list[str]
    total: float
    count: int


class SnapshotSummary(BaseModel):
    """A saved snapshot, without its entries."""
    index: int
    size: int
    created_at: datetime


class RestoreResult(BaseModel):
    """Result of restoring a snapshot."""
    index: int
    restored: bool = Field(..., description="False when no snapshot exists at the index")
    cart: CartView


class PaymentResult(BaseModel):
    """Result of the payment adapter demo."""
    system: str
    amount: float
    message: str
