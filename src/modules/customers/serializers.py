"""Customer DRF serializers for API output."""

from __future__ import annotations

from rest_framework import serializers


class CustomerBalanceSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    balance = serializers.DecimalField(max_digits=12, decimal_places=2)


class CustomerSearchResultSerializer(serializers.Serializer):
    """Autocomplete entry: ``{value, label}`` with the full name as label."""

    value = serializers.UUIDField(source="id")
    label = serializers.CharField(source="full_name")
