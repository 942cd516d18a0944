"""
FastAPI application for the shopping cart patterns demo.

This application stands in for the shop front:
1. Catalog and cart endpoints (/products, /cart, /cart/items)
2. Snapshot endpoints to save and restore the cart (/cart/snapshots, /cart/restore)
3. The messages the shop front's listener received (/notifications)
4. The payment adapter demo (/payments/{system})

Run with:
    uv run uvicorn api.main:app --reload

Then visit http://localhost:8000/docs for interactive API documentation.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Depends

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)-24s | %(levelname)-5s | %(message)s",
    datefmt="%H:%M:%S",
)

from api.models import (
    AddItemRequest,
    CartView,
    PaymentResult,
    ProductView,
    RestoreResult,
    SnapshotSummary,
)
from cart.history import reset_history_manager
from cart.notification_hub import reset_notification_hub
from cart.service import CartService
from cart.state_store import reset_state_store
from shared.catalog import Catalog, get_catalog
from shared.listeners import UserListener
from shared.models import CartEntry, ProductDisplay
from shared.payments import get_payment_processor

logger = logging.getLogger("cart_api")

# Messages kept for /notifications; older ones are dropped
MAX_NOTIFICATIONS = 1000

# Module-level instances (would use proper DI in production)
_service: Optional[CartService] = None
_listener: Optional[UserListener] = None


def reset_api_state() -> CartService:
    """
    Start over with an empty cart, empty history and a fresh listener.

    Resets the process-wide hub, store and history, so anything else holding
    the old ones keeps working on its own copy.
    """
    global _service, _listener
    hub = reset_notification_hub()
    # Nothing reads the hub's message log here; /notifications reads the listener
    hub.set_logging(False)
    store = reset_state_store(hub=hub)
    history = reset_history_manager()
    _service = CartService(state_store=store, history=history)
    _listener = UserListener(name="shop-front", max_messages=MAX_NOTIFICATIONS)
    _service.add_listener(_listener)
    logger.info("API state reset: empty cart, empty history")
    return _service


def get_service() -> CartService:
    """Get the cart service instance."""
    if _service is None:
        reset_api_state()
    return _service


def get_listener() -> UserListener:
    """Get the shop front's listener."""
    if _listener is None:
        reset_api_state()
    return _listener


def _cart_view(service: CartService) -> CartView:
    entries = service.get_cart()
    return CartView(
        entries=entries,
        display=[ProductDisplay.for_entry(e).display() for e in entries],
        total=service.get_total(),
        count=len(entries),
    )


# Application lifespan
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logger.info("Starting Shopping Cart Demo API")
    get_service()
    yield
    logger.info("Shutting down")


# Create the FastAPI app
app = FastAPI(
    title="Shopping Cart Patterns Demo",
    description="""
    A shopping cart demonstrating singleton, prototype, adapter, bridge,
    memento and observer.

    ## Endpoints

    - `/products` - Catalog, rendered through the display bridge
    - `/cart` - The one shared cart
    - `/cart/snapshots`, `/cart/restore` - Save and undo
    - `/notifications` - What the shop front's listener was told
    - `/payments/{system}` - Old system vs. adapter
    """,
    version="1.0.0",
    lifespan=lifespan,
)


# =============================================================================
# Health Check
# =============================================================================

@app.get("/health", tags=["Health"])
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "shopping-cart-patterns-demo"}


# =============================================================================
# Catalog
# =============================================================================

@app.get("/products", response_model=list[ProductView], tags=["Catalog"])
def list_products(catalog: Catalog = Depends(get_catalog)):
    """List catalog products."""
    return [
        ProductView(
            product_id=p.product_id,
            name=p.name,
            price=p.price,
            display=ProductDisplay.for_computer(p).display(),
        )
        for p in catalog.get_products()
    ]


# =============================================================================
# Cart
# =============================================================================

@app.get("/cart", response_model=CartView, tags=["Cart"])
def get_cart(service: CartService = Depends(get_service)):
    """Get the current cart."""
    return _cart_view(service)


@app.post("/cart/items", response_model=CartView, tags=["Cart"])
def add_item(
    request: AddItemRequest,
    service: CartService = Depends(get_service),
    catalog: Catalog = Depends(get_catalog),
):
    """
    Add an item to the cart.

    Every addition is broadcast to the cart's listeners.
    """
    if request.product_id is not None:
        product = catalog.get_product(request.product_id)
        if not product:
            logger.warning(f"Add to cart rejected, unknown product: {request.product_id}")
            raise HTTPException(status_code=404, detail=f"Product not found: {request.product_id}")
        service.add_to_cart(product)
    elif request.name is not None and request.price is not None:
        service.add_to_cart(CartEntry(name=request.name, price=request.price))
    else:
        raise HTTPException(
            status_code=422,
            detail="Provide either product_id, or both name and price",
        )
    return _cart_view(service)


# =============================================================================
# Snapshots
# =============================================================================

@app.post("/cart/snapshots", response_model=SnapshotSummary, tags=["Snapshots"])
def save_snapshot(service: CartService = Depends(get_service)):
    """Save the current cart."""
    snapshot = service.save_cart_state()
    return SnapshotSummary(index=snapshot.index, size=len(snapshot), created_at=snapshot.created_at)


@app.get("/cart/snapshots", response_model=list[SnapshotSummary], tags=["Snapshots"])
def list_snapshots(service: CartService = Depends(get_service)):
    """List saved snapshots, oldest first."""
    return [
        SnapshotSummary(index=s.index, size=len(s), created_at=s.created_at)
        for s in service.history.get_snapshots()
    ]


@app.post("/cart/restore", response_model=RestoreResult, tags=["Snapshots"])
def restore_snapshot(
    index: Optional[int] = None,
    service: CartService = Depends(get_service),
):
    """
    Restore a saved snapshot into the cart.

    Defaults to the most recent snapshot. Restoring an index that doesn't
    exist empties the cart; it is not an error.
    """
    with service.state_store.lock:
        if index is None:
            index = service.history.latest_index()
        restored = service.history.get_snapshot(index) is not None
        service.restore_cart_state(index)
    return RestoreResult(index=index, restored=restored, cart=_cart_view(service))


# =============================================================================
# Notifications
# =============================================================================

@app.get("/notifications", response_model=list[str], tags=["Notifications"])
def list_notifications(
    listener: UserListener = Depends(get_listener),
    service: CartService = Depends(get_service),
):
    """Messages the shop front's listener has received."""
    # The listener is only written to under the store lock
    with service.state_store.lock:
        return listener.messages


# =============================================================================
# Payments
# =============================================================================

@app.post("/payments/{system}", response_model=PaymentResult, tags=["Payments"])
def pay(system: str, amount: float = 100):
    """
    Pay through the old system ("old") or through the adapter ("new").
    """
    try:
        processor = get_payment_processor(system)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return PaymentResult(system=system, amount=amount, message=processor.pay(amount))


# =============================================================================
# Reset
# =============================================================================

@app.post("/reset", response_model=CartView, tags=["Cart"])
def reset():
    """Start over with an empty cart and history."""
    return _cart_view(reset_api_state())
