"""Order DTOs for the Service Layer.

Pydantic v2 contracts between the API layer and ``OrderService``.  They
only enforce types; the business validation of each line (presence,
positive whole quantity, product state) runs inside the service, item by
item in request order, so that the first violation wins.
"""

from __future__ import annotations

from typing import Any, List
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class CreateOrderItemDTO(BaseModel):
    """One requested line.  ``price`` is resolved from the catalog.

    Both fields accept any JSON value.  ``OrderService`` treats a blank
    ``product_id`` as missing and reports any other id the catalog does not
    hold, malformed or not, as an unknown product.  ``quantity`` must be a
    positive whole number.
    """

    model_config = ConfigDict(frozen=True)

    product_id: Any = Field(
        default=None,
        validation_alias=AliasChoices("product_id", "productId"),
    )
    quantity: Any = None


class CreateOrderDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: UUID
    items: List[CreateOrderItemDTO]
