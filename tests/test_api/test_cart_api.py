"""
Tests for the cart HTTP API.

These tests drive the shop front's flows over HTTP with FastAPI's TestClient.
"""

import threading
import time

import pytest
from fastapi.testclient import TestClient

from api.main import MAX_NOTIFICATIONS, app, get_listener, get_service, reset_api_state
from cart.state_store import get_state_store


@pytest.fixture
def client() -> TestClient:
    """Create a test client over a fresh cart."""
    reset_api_state()
    return TestClient(app)


def add(client: TestClient, **body) -> dict:
    response = client.post("/cart/items", json=body)
    assert response.status_code == 200, response.text
    return response.json()


class TestHealthAndCatalog:
    """Tests for health and catalog endpoints."""

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_list_products(self, client: TestClient):
        """Test that products come with their bridge-rendered display."""
        response = client.get("/products")

        assert response.status_code == 200
        products = response.json()
        assert len(products) == 3
        assert products[0] == {
            "product_id": "prod-001",
            "name": "Computer 1",
            "price": 1000,
            "display": "Product: Computer 1, Price: $1000",
        }


class TestCartEndpoints:
    """Tests for adding to and reading the cart."""

    def test_empty_cart(self, client: TestClient):
        response = client.get("/cart")

        assert response.status_code == 200
        assert response.json() == {"entries": [], "display": [], "total": 0, "count": 0}

    def test_add_catalog_product(self, client: TestClient):
        """Test adding a product by id."""
        cart = add(client, product_id="prod-002")

        assert cart["count"] == 1
        assert cart["entries"][0]["name"] == "Computer 2"
        assert cart["display"] == ["Product: Computer 2, Price: $1500"]
        assert cart["total"] == 1500

    def test_add_ad_hoc_entry(self, client: TestClient):
        """Test adding an entry by name and price."""
        cart = add(client, name="A", price=10)

        assert cart["entries"] == [{"name": "A", "price": 10, "product_id": None}]

    def test_add_unknown_product(self, client: TestClient):
        """Test that an unknown product id gives 404."""
        response = client.post("/cart/items", json={"product_id": "prod-999"})

        assert response.status_code == 404
        assert "prod-999" in response.json()["detail"]

    def test_add_without_item(self, client: TestClient):
        """Test that a request naming nothing is rejected."""
        response = client.post("/cart/items", json={"name": "A"})

        assert response.status_code == 422

    def test_api_uses_process_wide_cart(self, client: TestClient):
        """Test that the API's cart is the process-wide store."""
        add(client, name="A", price=10)

        assert [e.name for e in get_state_store().get_entries()] == ["A"]

    def test_notifications(self, client: TestClient):
        """Test that the shop front's listener hears every addition."""
        add(client, product_id="prod-001")
        add(client, name="A", price=10)

        response = client.get("/notifications")

        assert response.json() == [
            "Item added to cart: Computer 1",
            "Item added to cart: A",
        ]


class TestSnapshotEndpoints:
    """Tests for saving and restoring the cart."""

    def test_add_save_add_restore(self, client: TestClient):
        """Test the add, save, add, restore scenario over HTTP."""
        add(client, name="A", price=10)
        add(client, name="B", price=20)

        saved = client.post("/cart/snapshots").json()
        assert saved["index"] == 0
        assert saved["size"] == 2

        cart = add(client, name="C", price=30)
        assert [e["name"] for e in cart["entries"]] == ["A", "B", "C"]

        result = client.post("/cart/restore", params={"index": 0}).json()

        assert result["restored"] is True
        assert [e["name"] for e in result["cart"]["entries"]] == ["A", "B"]
        assert client.get("/cart").json()["total"] == 30

    def test_restore_defaults_to_latest(self, client: TestClient):
        add(client, name="A", price=10)
        client.post("/cart/snapshots")
        add(client, name="B", price=20)
        client.post("/cart/snapshots")
        add(client, name="C", price=30)

        result = client.post("/cart/restore").json()

        assert result["index"] == 1
        assert result["cart"]["count"] == 2

    def test_restore_out_of_range_empties_cart(self, client: TestClient):
        """Test that a missing snapshot isn't an error status."""
        add(client, name="A", price=10)

        response = client.post("/cart/restore", params={"index": 5})

        assert response.status_code == 200
        assert response.json()["restored"] is False
        assert response.json()["cart"]["count"] == 0

    def test_restore_is_silent(self, client: TestClient):
        add(client, name="A", price=10)
        client.post("/cart/snapshots")
        client.post("/cart/restore")

        assert client.get("/notifications").json() == ["Item added to cart: A"]

    def test_list_snapshots(self, client: TestClient):
        client.post("/cart/snapshots")
        add(client, name="A", price=10)
        client.post("/cart/snapshots")

        snapshots = client.get("/cart/snapshots").json()

        assert [(s["index"], s["size"]) for s in snapshots] == [(0, 0), (1, 1)]


class TestPaymentEndpoints:
    """Tests for the payment adapter demo."""

    def test_old_system(self, client: TestClient):
        response = client.post("/payments/old")

        assert response.status_code == 200
        assert response.json()["message"] == "Processing payment with old system: $100"

    def test_new_system_through_adapter(self, client: TestClient):
        response = client.post("/payments/new", params={"amount": 250})

        assert response.json() == {
            "system": "new",
            "amount": 250,
            "message": "Processing payment with new system: $250",
        }

    def test_unknown_system(self, client: TestClient):
        response = client.post("/payments/barter")

        assert response.status_code == 400


class TestReset:
    """Tests for starting over."""

    def test_reset(self, client: TestClient):
        add(client, name="A", price=10)
        client.post("/cart/snapshots")

        response = client.post("/reset")

        assert response.json()["count"] == 0
        assert client.get("/cart/snapshots").json() == []
        assert client.get("/notifications").json() == []


class TestNotificationOrdering:
    """Tests for additions arriving on several requests at once."""

    def test_notifications_follow_cart_order(self, client: TestClient):
        """Test that a slow listener can't let a later addition overtake an earlier one."""
        entered = threading.Event()
        release = threading.Event()

        class SlowOnFirst:
            def notify(self, message):
                if message.endswith("FIRST"):
                    entered.set()
                    release.wait(timeout=5)

        get_service().add_listener(SlowOnFirst())
        first = threading.Thread(target=add, args=(client,), kwargs={"name": "FIRST", "price": 1})
        second = threading.Thread(target=add, args=(client,), kwargs={"name": "SECOND", "price": 2})

        first.start()
        assert entered.wait(timeout=5)
        second.start()
        time.sleep(0.2)
        release.set()
        first.join(timeout=10)
        second.join(timeout=10)

        cart = [e["name"] for e in client.get("/cart").json()["entries"]]
        assert cart == ["FIRST", "SECOND"]
        assert client.get("/notifications").json() == [f"Item added to cart: {name}" for name in cart]


class TestNotificationRetention:
    """Tests for how much notification history the API keeps."""

    def test_hub_message_log_is_off(self, client: TestClient):
        add(client, name="A", price=10)

        assert get_service().hub.get_message_log() == []

    def test_shop_front_listener_is_capped(self, client: TestClient):
        assert get_listener().received.maxlen == MAX_NOTIFICATIONS


class TestLifespan:
    """Tests for application startup and shutdown."""

    def test_startup_and_shutdown_logged(self, caplog):
        with caplog.at_level("INFO", logger="cart_api"):
            with TestClient(app):
                pass

        starting = [r for r in caplog.records if r.getMessage() == "Starting Shopping Cart Demo API"]
        assert starting and starting[0].name == "cart_api"
        assert "Shutting down" in caplog.text
