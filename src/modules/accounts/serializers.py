"""Account DRF serializers (output only; input goes through the DTOs)."""

from __future__ import annotations

from rest_framework import serializers

from modules.accounts.models import User


class UserSummarySerializer(serializers.ModelSerializer):
    """Minimal user snapshot embedded in order payloads."""

    name = serializers.CharField(source="display_name", read_only=True)

    class Meta:
        model = User
        fields = ["id", "name", "email"]
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source="display_name", read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "name",
            "email",
            "role",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
