"""Product model — the only persisted entity."""

from sqlalchemy import Boolean, CheckConstraint, Column, Float, Integer, String, true

from .base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    price = Column(Float, nullable=False)
    availability = Column(Boolean, nullable=False, default=True, server_default=true())

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_products_price_positive"),
    )

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r}>"
