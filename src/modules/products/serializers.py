"""Product DRF serializers for API output.

Input is validated by the Pydantic DTOs in ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSummarySerializer(serializers.ModelSerializer):
    """Minimal product snapshot embedded in order items."""

    class Meta:
        model = Product
        fields = ["id", "name"]
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    """Full product representation for catalog administrators."""

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "purchase_price",
            "sale_price",
            "margin",
            "stock",
            "is_visible",
            "images",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PublicProductSerializer(serializers.ModelSerializer):
    """Storefront representation; purchase price and margin stay private."""

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "sale_price",
            "stock",
            "images",
            "created_at",
        ]
        read_only_fields = fields
