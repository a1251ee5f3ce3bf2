"""Product service — one function per data-store operation on Product."""

from loguru import logger
from sqlalchemy.orm import Session

from ..models import Product
from ..schemas.products import ProductCreate, ProductUpdate

# products.id is a 32-bit INTEGER column
_ID_MIN, _ID_MAX = -(2**31), 2**31 - 1


def _commit(db: Session) -> None:
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise


def list_products(db: Session) -> list[Product]:
    return db.query(Product).order_by(Product.id).all()


def get_product(db: Session, product_id: int) -> Product | None:
    """Return the product, or None when no row has this id."""
    if not _ID_MIN <= product_id <= _ID_MAX:
        return None
    return db.get(Product, product_id)


def create_product(db: Session, data: ProductCreate) -> Product:
    product = Product(name=data.name, price=data.price, availability=True)
    db.add(product)
    _commit(db)
    db.refresh(product)
    logger.info("Product #{} created", product.id)
    return product


def update_product(db: Session, product: Product, data: ProductUpdate) -> Product:
    """Overwrite every mutable field."""
    product.name = data.name
    product.price = data.price
    product.availability = data.availability
    _commit(db)
    db.refresh(product)
    logger.info("Product #{} updated", product.id)
    return product


def toggle_availability(db: Session, product: Product) -> Product:
    product.availability = not product.availability
    _commit(db)
    db.refresh(product)
    logger.info("Product #{} availability -> {}", product.id, product.availability)
    return product


def delete_product(db: Session, product: Product) -> None:
    product_id = product.id
    db.delete(product)
    _commit(db)
    logger.info("Product #{} deleted", product_id)
