from rest_framework import serializers
from .models import Restaurant, Menu


# =============================================================================
# Input Serializers
# =============================================================================

class RestaurantFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for restaurant listing.

    Query Parameters:
        search (str): Substring of the restaurant name
        open_at (datetime): Only restaurants open at this moment
        price_min (decimal): Lower bound of dish prices to count
        price_max (decimal): Upper bound of dish prices to count
        more_than (int): More than N dishes within the price range
        less_than (int): Fewer than N dishes within the price range
    """

    search = serializers.CharField(required=False, allow_blank=True)
    open_at = serializers.DateTimeField(required=False)
    price_min = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False)
    price_max = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False)
    more_than = serializers.IntegerField(min_value=0, required=False)
    less_than = serializers.IntegerField(min_value=1, required=False)

    def validate(self, attrs):
        """Validate price range and dish count bounds."""
        price_min = attrs.get('price_min')
        price_max = attrs.get('price_max')

        if price_min is not None and price_max is not None and price_min > price_max:
            raise serializers.ValidationError({
                'price_max': 'price_max must not be lower than price_min'
            })

        if 'more_than' in attrs and 'less_than' in attrs:
            raise serializers.ValidationError({
                'less_than': 'Use either more_than or less_than, not both'
            })

        return attrs


class RestaurantSearchQuerySerializer(serializers.Serializer):
    """
    Validate query parameters for relevance search.

    Query Parameters:
        q (str): Search query, matched against restaurant and dish names
        page (int): 1-based page number
        page_size (int): Results per page
    """

    q = serializers.CharField(required=True, allow_blank=False, max_length=200)
    page = serializers.IntegerField(min_value=1, required=False, default=1)
    # Values above RESTAURANT_SEARCH_MAX_PAGE_SIZE are clamped by the search service
    page_size = serializers.IntegerField(min_value=1, required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class MenuSerializer(serializers.ModelSerializer):
    """Serializer for menu items."""

    class Meta:
        model = Menu
        fields = [
            'id',
            'restaurant',
            'dish_name',
            'price',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'restaurant', 'created_at', 'updated_at']
        # Per-restaurant uniqueness is checked by the menu service (409)
        validators = []


class RestaurantSerializer(serializers.ModelSerializer):
    """Main serializer for restaurants, including the menu."""

    menus = MenuSerializer(many=True, read_only=True)
    owner_name = serializers.CharField(source='owner.name', read_only=True)

    class Meta:
        model = Restaurant
        fields = [
            'id',
            'name',
            'cash_balance',
            'opening_hours',
            'owner',
            'owner_name',
            'menus',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id',
            'cash_balance',
            'owner',
            'created_at',
            'updated_at',
        ]
        # Name uniqueness is checked by the restaurant service (409)
        extra_kwargs = {
            'name': {'validators': []},
        }


class RestaurantCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating and updating restaurants."""

    class Meta:
        model = Restaurant
        fields = [
            'name',
            'opening_hours',
        ]
        extra_kwargs = {
            'name': {'validators': []},
        }


class RestaurantListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views (no menu)."""

    class Meta:
        model = Restaurant
        fields = [
            'id',
            'name',
            'cash_balance',
            'opening_hours',
            'owner',
        ]
        read_only_fields = fields


class RestaurantSearchResultSerializer(RestaurantListSerializer):
    """Search hit with its relevance score."""

    relevance = serializers.IntegerField(read_only=True)

    class Meta(RestaurantListSerializer.Meta):
        fields = RestaurantListSerializer.Meta.fields + ['relevance']
        read_only_fields = fields


class RestaurantSearchPageSerializer(serializers.Serializer):
    """Serializer for one page of search results."""

    count = serializers.IntegerField()
    page = serializers.IntegerField()
    page_size = serializers.IntegerField()
    results = RestaurantSearchResultSerializer(many=True)
