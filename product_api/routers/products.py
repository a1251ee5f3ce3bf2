"""
routers/products.py — Products CRUD endpoints

Static dispatch table: (method, path) -> (rule table, handler). Every
id-bearing route validates the raw path segment before touching the
database; handlers look the product up and raise 404 when it is absent.

Called by: main.py (include_router under settings.api_prefix)
Depends on: validation.py, services/product_service.py, database.py
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..docs import ID_PARAMETER, json_body
from ..schemas.errors import ErrorResponse
from ..schemas.products import ProductCreate, ProductOut, ProductUpdate
from ..services import product_service
from ..validation import (
    CREATE_RULES,
    ID_RULES,
    UPDATE_RULES,
    ValidatedInput,
    validate_request,
)

router = APIRouter(tags=["Products"])

NOT_FOUND = "Product not found"
DELETED = "Product deleted"

_BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Validation failed"}}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": NOT_FOUND}}
_ID_ROUTE = {"parameters": [ID_PARAMETER]}


def _get_or_404(db: Session, product_id: int):
    product = product_service.get_product(db, product_id)
    if product is None:
        raise HTTPException(404, NOT_FOUND)
    return product


@router.get("", response_model=list[ProductOut], summary="Get a list of products")
@router.get("/", response_model=list[ProductOut], include_in_schema=False)
def list_products(db: Session = Depends(get_db)):
    """Return every product ordered by id."""
    return product_service.list_products(db)


@router.get(
    "/{id}",
    response_model=ProductOut,
    summary="Get a product by id",
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    openapi_extra=_ID_ROUTE,
)
def get_product(
    data: ValidatedInput = Depends(validate_request(*ID_RULES)),
    db: Session = Depends(get_db),
):
    return _get_or_404(db, data.path_int("id"))


@router.post(
    "",
    response_model=ProductOut,
    status_code=201,
    summary="Create a new product",
    responses=_BAD_REQUEST,
    openapi_extra={"requestBody": json_body(ProductCreate)},
)
@router.post("/", response_model=ProductOut, status_code=201, include_in_schema=False)
def create_product(
    data: ValidatedInput = Depends(validate_request(*CREATE_RULES)),
    db: Session = Depends(get_db),
):
    """Create a product; availability always starts as true."""
    payload = ProductCreate(name=data.body["name"], price=float(data.body["price"]))
    return product_service.create_product(db, payload)


@router.put(
    "/{id}",
    response_model=ProductOut,
    summary="Update a product with user input",
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    openapi_extra={**_ID_ROUTE, "requestBody": json_body(ProductUpdate)},
)
def update_product(
    data: ValidatedInput = Depends(validate_request(*UPDATE_RULES)),
    db: Session = Depends(get_db),
):
    product = _get_or_404(db, data.path_int("id"))
    payload = ProductUpdate(
        name=data.body["name"],
        price=float(data.body["price"]),
        availability=data.body["availability"],
    )
    return product_service.update_product(db, product, payload)


@router.patch(
    "/{id}",
    response_model=ProductOut,
    summary="Toggle product availability",
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    openapi_extra=_ID_ROUTE,
)
def update_availability(
    data: ValidatedInput = Depends(validate_request(*ID_RULES)),
    db: Session = Depends(get_db),
):
    product = _get_or_404(db, data.path_int("id"))
    return product_service.toggle_availability(db, product)


@router.delete(
    "/{id}",
    response_model=str,
    summary="Delete a product by id",
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    openapi_extra=_ID_ROUTE,
)
def delete_product(
    data: ValidatedInput = Depends(validate_request(*ID_RULES)),
    db: Session = Depends(get_db),
):
    product = _get_or_404(db, data.path_int("id"))
    product_service.delete_product(db, product)
    return DELETED
