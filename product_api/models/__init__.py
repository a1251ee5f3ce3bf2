"""Database models.

Import from here:  from product_api.models import Base, Product
"""

from .base import Base  # noqa: F401
from .product import Product  # noqa: F401
