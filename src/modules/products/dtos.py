"""Product DTOs for the Service Layer.

Pydantic v2 contracts between the API layer and ``ProductService``.
DTOs are immutable (``frozen=True``).
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, HttpUrl, field_validator


class CreateProductDTO(BaseModel):
    """Input for product creation.  New products are visible by default."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    purchase_price: Decimal
    sale_price: Decimal
    stock: int = 0
    is_visible: bool = True
    images: List[HttpUrl] = []

    @field_validator("purchase_price", "sale_price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required.")
        return v.strip()

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Stock must be non-negative.")
        return v


class UpdateProductDTO(BaseModel):
    """Partial update; only supplied (non-``None``) fields are applied."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    description: Optional[str] = None
    purchase_price: Optional[Decimal] = None
    sale_price: Optional[Decimal] = None
    stock: Optional[int] = None
    is_visible: Optional[bool] = None
    images: Optional[List[HttpUrl]] = None

    @field_validator("purchase_price", "sale_price")
    @classmethod
    def price_must_be_positive(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("Stock must be non-negative.")
        return v
