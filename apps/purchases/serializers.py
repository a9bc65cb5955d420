from rest_framework import serializers
from .models import PurchaseHistory


# =============================================================================
# Input Serializers
# =============================================================================

class PurchaseItemSerializer(serializers.Serializer):
    """
    One line of a purchase request.

    Fields:
        menu_id (int): Menu item to buy
        quantity (int): Number of units, 1 to 100
    """

    menu_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1, max_value=100, default=1)


class PurchaseRequestSerializer(serializers.Serializer):
    """Validate a purchase request body."""

    items = PurchaseItemSerializer(many=True, allow_empty=False)


# =============================================================================
# Output Serializers
# =============================================================================

class PurchaseHistorySerializer(serializers.ModelSerializer):
    """Serializer for purchase history records."""

    class Meta:
        model = PurchaseHistory
        fields = [
            'id',
            'menu',
            'dish_name',
            'restaurant_name',
            'transaction_amount',
            'transaction_date',
        ]
        read_only_fields = fields
