"""
schemas/products.py — Pydantic models for product endpoints

Business Rules:
- Name is required and non-empty (whitespace stripped)
- Price is required and strictly positive
- Availability defaults to True on create, required on full update

Called by: routers/products.py, services/product_service.py
Depends on: pydantic
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["Monitor"])
    price: float = Field(..., gt=0, examples=[500])

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Product name is required")
        return v


class ProductUpdate(ProductCreate):
    availability: bool = Field(..., examples=[True])


class ProductOut(BaseModel):
    id: int
    name: str
    price: float
    availability: bool

    model_config = ConfigDict(from_attributes=True)
