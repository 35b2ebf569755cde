"""Product DRF serializers for API input/output."""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "price",
            "stock",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductUpdateSerializer(serializers.Serializer):
    """Shape check for ``PATCH /products/{id}/``; rules live in the DTO."""

    name = serializers.CharField(required=False, allow_blank=True)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    stock = serializers.IntegerField(required=False)
    status = serializers.CharField(required=False)


class ProductSearchResultSerializer(serializers.Serializer):
    """Autocomplete entry: ``{value, label, price}``."""

    value = serializers.UUIDField(source="id")
    label = serializers.CharField(source="name")
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
