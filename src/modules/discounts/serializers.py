"""Discount code DRF serializers for API input/output."""

from __future__ import annotations

from rest_framework import serializers

from modules.discounts.models import DiscountCode


class DiscountCodeSerializer(serializers.ModelSerializer):
    """Read serializer for the discount code resource."""

    class Meta:
        model = DiscountCode
        fields = [
            "id",
            "code",
            "discount",
            "status",
            "expired_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class DiscountCodeCreateSerializer(serializers.Serializer):
    """Shape check for ``POST /codes/``; rules live in the DTO."""

    code = serializers.CharField()
    discount = serializers.DecimalField(max_digits=12, decimal_places=2)
    status = serializers.CharField()
    expired_at = serializers.DateTimeField(required=False, allow_null=True)


class DiscountCodeUpdateSerializer(serializers.Serializer):
    code = serializers.CharField(required=False, allow_blank=True)
    discount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    status = serializers.CharField(required=False)
    expired_at = serializers.DateTimeField(required=False, allow_null=True)


class DiscountCodeVerificationSerializer(serializers.Serializer):
    code = serializers.CharField()
    discount = serializers.DecimalField(max_digits=12, decimal_places=2)
    status = serializers.CharField()
