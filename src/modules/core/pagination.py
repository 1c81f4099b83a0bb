"""Page/limit pagination helpers shared by the list endpoints.

Services return ``(items, total)`` tuples; views wrap them with
``pagination_payload`` so every listing exposes the same metadata.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Tuple

from django.conf import settings
from django.db import models

from modules.core.exceptions import ValidationError


def validate_page(page: Any, limit: Any) -> Tuple[int, int]:
    """Coerce and check ``page >= 1`` and ``1 <= limit <= MAX_PAGE_SIZE``.

    Raises:
        ValidationError: either value is not an integer or is out of range.
    """
    try:
        page = int(page)
        limit = int(limit)
    except (TypeError, ValueError) as exc:
        raise ValidationError("page and limit must be integers.") from exc
    if page < 1:
        raise ValidationError("page must be greater than or equal to 1.")
    if limit < 1:
        raise ValidationError("limit must be greater than 0.")
    if limit > settings.MAX_PAGE_SIZE:
        raise ValidationError(f"limit must be at most {settings.MAX_PAGE_SIZE}.")
    return page, limit


def paginate(
    queryset: models.QuerySet, page: int, limit: int
) -> Tuple[List[Any], int]:
    """Slice *queryset* to one page and return it with the total count."""
    total = queryset.count()
    offset = (page - 1) * limit
    return list(queryset[offset : offset + limit]), total


def pagination_payload(total: int, page: int, limit: int) -> Dict[str, int]:
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit) if limit else 0,
    }
