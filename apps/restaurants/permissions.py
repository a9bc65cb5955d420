"""
Custom permission classes for restaurants app.

Reads are public; writes require the restaurant owner.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsRestaurantOwnerOrReadOnly(BasePermission):
    """
    Permission to modify a restaurant or one of its menu items.

    Allows if:
    - Request is read-only
    - User owns the restaurant (or the menu item's restaurant)

    Usage:
        class RestaurantViewSet(viewsets.ModelViewSet):
            permission_classes = [IsAuthenticatedOrReadOnly, IsRestaurantOwnerOrReadOnly]
    """

    message = 'Restaurant owner required'

    def has_object_permission(self, request, view, obj):
        """Check if user owns the restaurant behind ``obj``."""
        if request.method in SAFE_METHODS:
            return True

        restaurant = getattr(obj, 'restaurant', obj)
        return restaurant.is_owned_by(request.user)
