"""Product service layer (catalog administration).

Rules enforced here:
- Margin is derived, never accepted from callers.
- Non-privileged callers only ever see visible products.
- Search is a plain case-insensitive substring match on the name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Tuple

import structlog
from django.db import transaction

from modules.core.exceptions import ValidationError
from modules.core.pagination import paginate, validate_page
from modules.products.exceptions import ProductNotFound
from modules.products.filters import ProductFilter
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

_UPDATABLE_FIELDS = (
    "name",
    "description",
    "purchase_price",
    "sale_price",
    "stock",
    "is_visible",
)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        product = Product(
            name=dto.name,
            description=dto.description,
            purchase_price=dto.purchase_price,
            sale_price=dto.sale_price,
            stock=dto.stock,
            is_visible=dto.is_visible,
            images=[str(url) for url in dto.images],
        )
        product = self._repo.save(product)
        logger.info("product.created", product_id=str(product.id))
        return product

    @transaction.atomic
    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Apply the supplied fields; the margin follows any price change.

        Raises:
            ProductNotFound: the product does not exist.
        """
        product = self._get_or_raise(id)
        for field in _UPDATABLE_FIELDS:
            value = getattr(dto, field)
            if value is not None:
                setattr(product, field, value)
        if dto.images is not None:
            product.images = [str(url) for url in dto.images]

        product = self._repo.save(product)
        logger.info("product.updated", product_id=str(id), margin=str(product.margin))
        return product

    @transaction.atomic
    def set_visibility(self, id: str, is_visible: bool) -> Product:
        product = self._get_or_raise(id)
        product.is_visible = is_visible
        product = self._repo.save(product)
        logger.info("product.visibility_changed", product_id=str(id), is_visible=is_visible)
        return product

    @transaction.atomic
    def set_stock(self, id: str, stock: int) -> Product:
        product = self._get_or_raise(id)
        product.stock = stock
        product = self._repo.save(product)
        logger.info("product.stock_set", product_id=str(id), stock=stock)
        return product

    @transaction.atomic
    def delete_product(self, id: str) -> None:
        if not self._repo.delete(id):
            raise ProductNotFound(f"Product {id} not found.")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_product(self, id: str, visible_only: bool = False) -> Product:
        """Raises ``ProductNotFound`` for missing (or hidden, when
        *visible_only*) products."""
        product = self._get_or_raise(id)
        if visible_only and not product.is_visible:
            raise ProductNotFound(f"Product {id} not found.")
        return product

    def list_products(
        self,
        page: int = 1,
        limit: int = 10,
        filters: Optional[Mapping[str, Any]] = None,
        visible_only: bool = False,
    ) -> Tuple[List[Product], int]:
        """Paginated catalog listing.

        *filters* are query parameters understood by ``ProductFilter``
        (``search``, ``min_price``, ``max_price``, ``in_stock``,
        ``is_visible``).

        Raises:
            ValidationError: bad pagination or filter values.
        """
        page, limit = validate_page(page, limit)
        filterset = ProductFilter(
            filters or {}, queryset=self._repo.list(visible_only=visible_only)
        )
        if not filterset.is_valid():
            raise ValidationError(f"Invalid filters: {dict(filterset.errors)}")
        return paginate(filterset.qs, page, limit)

    def _get_or_raise(self, id: str) -> Product:
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product
