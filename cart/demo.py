"""
Demonstration scripts for the shopping cart.

These functions show the cart core in action: listeners hearing about
additions, snapshots being saved and restored, and the payment adapter.
Run them to see the logs the shop front would react to.
"""

import logging
from cart.history import HistoryManager
from cart.notification_hub import NotificationHub
from cart.service import CartService
from cart.state_store import StateStore
from shared.catalog import Catalog
from shared.listeners import RecordingListener, UserListener
from shared.models import ProductDisplay
from shared.payments import NewPaymentSystem, OldPaymentSystem, PaymentAdapter

# Configure logging to see what's happening
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)-24s | %(levelname)-5s | %(message)s",
    datefmt="%H:%M:%S",
)


def _fresh_service() -> CartService:
    hub = NotificationHub()
    return CartService(state_store=StateStore(hub=hub), history=HistoryManager())


def _print_cart(service: CartService) -> None:
    print("\nCart:")
    entries = service.get_cart()
    if not entries:
        print("  (empty)")
    for entry in entries:
        print(f"  {ProductDisplay.for_entry(entry).display()}")


def run_cart_demo():
    """
    Demonstrate adding catalog products to the cart.

    This shows:
    1. The catalog renders each product through the display bridge
    2. Adding a product appends it to the one cart
    3. The user listener is told about every addition
    """
    print("\n" + "=" * 70)
    print("CART DEMO: Adding Products")
    print("=" * 70 + "\n")

    catalog = Catalog.default()
    service = _fresh_service()
    user = UserListener()
    service.add_listener(user)

    print("Products:")
    for product in catalog.get_products():
        print(f"  [{product.product_id}] {ProductDisplay.for_computer(product).display()}")

    print("\n" + "-" * 70)
    print("ACTION: Adding Computer 1 and Computer 3")
    print("-" * 70 + "\n")

    service.add_to_cart(catalog.get_product("prod-001"))
    service.add_to_cart(catalog.get_product("prod-003"))

    _print_cart(service)
    print(f"\nTotal: ${service.get_total():.2f}")
    print(f"\nUser received {user.get_received_count()} notifications")

    return service.get_cart()


def run_undo_demo():
    """
    Demonstrate saving and restoring cart state.

    The cart is saved after two additions, a third item is added, and the
    last save is restored. Restoring does not notify anyone.
    """
    print("\n" + "=" * 70)
    print("CART DEMO: Save and Restore")
    print("=" * 70 + "\n")

    catalog = Catalog.default()
    service = _fresh_service()
    user = UserListener()
    service.add_listener(user)

    service.add_to_cart(catalog.get_product("prod-001"))
    service.add_to_cart(catalog.get_product("prod-002"))
    snapshot = service.save_cart_state()
    print(f"\nSaved snapshot {snapshot.index} with {len(snapshot)} entries")

    service.add_to_cart(catalog.get_product("prod-003"))
    _print_cart(service)

    print("\n" + "-" * 70)
    print("ACTION: Restoring the last saved state")
    print("-" * 70 + "\n")

    service.restore_cart_state()
    _print_cart(service)

    print(f"\nUser received {user.get_received_count()} notifications (restore is silent)")

    return service.get_cart()


def run_observers_demo():
    """
    Demonstrate listener registration, removal and fault isolation.
    """
    print("\n" + "=" * 70)
    print("CART DEMO: Listeners")
    print("=" * 70 + "\n")

    catalog = Catalog.default()
    service = _fresh_service()

    broken = RecordingListener(name="broken", fail=True)
    user = UserListener()
    audit = RecordingListener(name="audit")

    service.add_listener(broken)
    service.add_listener(user)
    subscription = service.add_listener(audit)

    print("Registered: broken, user, audit")
    service.add_to_cart(catalog.get_product("prod-001"))

    print("\nUnsubscribing audit...")
    service.hub.unsubscribe(subscription)
    service.add_to_cart(catalog.get_product("prod-002"))

    print(f"\nuser received:  {user.messages}")
    print(f"audit received: {audit.messages}")

    return user.messages, audit.messages


def run_payments_demo():
    """
    Demonstrate paying through the old system and through the adapter.
    """
    print("\n" + "=" * 70)
    print("CART DEMO: Payment Adapter")
    print("=" * 70 + "\n")

    old_system = OldPaymentSystem()
    adapter = PaymentAdapter(NewPaymentSystem())

    results = {
        "old": old_system.process(100),
        "adapter": adapter.pay(100),
    }
    print(f"Old System: {results['old']}")
    print(f"Adapter:    {results['adapter']}")

    return results


if __name__ == "__main__":
    print("\nRunning Shopping Cart Demos")
    print("=" * 70)

    run_cart_demo()
    run_undo_demo()
    run_observers_demo()
    run_payments_demo()
