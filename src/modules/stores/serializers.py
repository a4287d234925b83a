"""Store DRF serializers (output representation)."""

from __future__ import annotations

from rest_framework import serializers

from modules.stores.models import Store


class StoreSerializer(serializers.ModelSerializer):
    class Meta:
        model = Store
        fields = ["id", "description"]
        read_only_fields = fields
