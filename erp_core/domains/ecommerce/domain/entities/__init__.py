"""
E-commerce Domain Entities

Business entities with identity and lifecycle for the e-commerce domain.
"""

from erp_core.domains.ecommerce.domain.entities.catalog_item import CatalogItem
from erp_core.domains.ecommerce.domain.entities.customer import Customer
from erp_core.domains.ecommerce.domain.entities.order import Order
from erp_core.domains.ecommerce.domain.entities.order_address import OrderAddress, is_valid_postal_code
from erp_core.domains.ecommerce.domain.entities.order_item import OrderItem
from erp_core.domains.ecommerce.domain.entities.product import Product, SafeProduct
from erp_core.domains.ecommerce.domain.entities.product_category import ProductCategory, SafeCategory
from erp_core.domains.ecommerce.domain.entities.product_variant import ProductVariant, SafeVariant

__all__ = [
    "CatalogItem",
    "Product",
    "SafeProduct",
    "ProductVariant",
    "SafeVariant",
    "ProductCategory",
    "SafeCategory",
    "Customer",
    "OrderAddress",
    "is_valid_postal_code",
    "Order",
    "OrderItem",
]
