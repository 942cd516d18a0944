"""
Product catalog for the shopping cart demo.

Products are produced by cloning a base prototype rather than constructing
each one from scratch. The catalog is in-memory only.
"""

import logging
from typing import Optional

from shared.models import Computer

logger = logging.getLogger("catalog")


# name, price pairs for the default catalog
DEFAULT_PRODUCTS = [
    ("Computer 1", 1000),
    ("Computer 2", 1500),
    ("Computer 3", 2000),
]


class Catalog:
    """
    In-memory product catalog.

    Example:
        catalog = Catalog.default()
        product = catalog.get_product("prod-001")
        entry = product.to_entry()
    """

    def __init__(self, products: Optional[list[Computer]] = None):
        self._products: dict[str, Computer] = {}
        for product in products or []:
            self.add_product(product)

    @classmethod
    def default(cls) -> "Catalog":
        """Build the default catalog by cloning one prototype per product."""
        prototype = Computer(name="Computer", price=0)
        products = []
        for position, (name, price) in enumerate(DEFAULT_PRODUCTS, start=1):
            product = prototype.clone()
            product.name = name
            product.price = price
            product.product_id = f"prod-{position:03d}"
            products.append(product)
        return cls(products)

    def add_product(self, product: Computer) -> Computer:
        """
        Add a product to the catalog.

        Products without an id get the next sequential one.
        """
        if product.product_id is None:
            product.product_id = f"prod-{len(self._products) + 1:03d}"
        self._products[product.product_id] = product
        logger.debug(f"Catalog product added: {product.product_id} ({product.name})")
        return product

    def get_product(self, product_id: str) -> Optional[Computer]:
        """Get a product by ID."""
        return self._products.get(product_id)

    def get_products(self) -> list[Computer]:
        """Get all products, in the order they were added."""
        return list(self._products.values())


_default_catalog: Optional[Catalog] = None


def get_catalog() -> Catalog:
    """Get the default catalog singleton."""
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = Catalog.default()
    return _default_catalog
