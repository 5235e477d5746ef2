"""SQLAlchemy ORM models."""

from storechat.models.base import Base
from storechat.models.catalog_model import CatalogModel
from storechat.models.customer import Customer, Sale
from storechat.models.product import Product

__all__ = [
    "Base",
    "CatalogModel",
    "Customer",
    "Product",
    "Sale",
]
