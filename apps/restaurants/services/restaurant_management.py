"""Restaurant CRUD operations service."""

import logging
from typing import Any, Dict

from django.db import IntegrityError, transaction
from django.contrib.auth import get_user_model

from ..models import Restaurant
from .exceptions import (
    DuplicateRestaurantError,
    NotRestaurantOwnerError,
    RestaurantNotFoundError,
)
from .opening_hours import parse_opening_hours

User = get_user_model()

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('name', 'opening_hours')


def _check_owner(restaurant: Restaurant, user: User) -> None:
    if not restaurant.is_owned_by(user):
        raise NotRestaurantOwnerError("Restaurant owner required")


def _name_taken(name: str, exclude_id: int = None) -> bool:
    queryset = Restaurant.objects.filter(name=name)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    return queryset.exists()


def create_restaurant(
    *,
    name: str,
    owner: User,
    opening_hours: str = ''
) -> Restaurant:
    """
    Create a restaurant owned by ``owner`` with a zero cash balance.

    Raises:
        DuplicateRestaurantError: If the name is already taken
        InvalidOpeningHoursError: If opening_hours cannot be parsed
    """
    parse_opening_hours(opening_hours)

    if _name_taken(name):
        raise DuplicateRestaurantError("Name should be unique!")

    try:
        with transaction.atomic():
            restaurant = Restaurant.objects.create(
                name=name,
                opening_hours=opening_hours,
                owner=owner,
            )
    except IntegrityError:
        raise DuplicateRestaurantError("Name should be unique!")

    logger.info("User %s created restaurant %s (id=%s)", owner.pk, restaurant.name, restaurant.pk)
    return restaurant


def get_restaurant_by_id(*, restaurant_id: int) -> Restaurant:
    """
    Get restaurant by ID, with its menu prefetched.

    Raises:
        RestaurantNotFoundError: If restaurant doesn't exist
    """
    try:
        return (
            Restaurant.objects
            .select_related('owner')
            .prefetch_related('menus')
            .get(id=restaurant_id)
        )
    except Restaurant.DoesNotExist:
        raise RestaurantNotFoundError(f"Restaurant {restaurant_id} not found")


def update_restaurant(
    *,
    restaurant_id: int,
    user: User,
    data: Dict[str, Any]
) -> Restaurant:
    """
    Update name and/or opening hours of a restaurant.

    Args:
        restaurant_id: Restaurant ID
        user: User performing the update, must be the owner
        data: Fields to update; anything but name and opening_hours is ignored

    Returns:
        Updated Restaurant instance

    Raises:
        RestaurantNotFoundError: If restaurant doesn't exist
        NotRestaurantOwnerError: If user is not the owner
        DuplicateRestaurantError: If the new name is already taken
        InvalidOpeningHoursError: If opening_hours cannot be parsed
    """
    try:
        with transaction.atomic():
            try:
                restaurant = (
                    Restaurant.objects
                    .select_for_update()
                    .get(id=restaurant_id)
                )
            except Restaurant.DoesNotExist:
                raise RestaurantNotFoundError(f"Restaurant {restaurant_id} not found")

            _check_owner(restaurant, user)

            if 'opening_hours' in data:
                parse_opening_hours(data['opening_hours'])
            if 'name' in data and _name_taken(data['name'], exclude_id=restaurant.id):
                raise DuplicateRestaurantError("Name should be unique!")

            for field, value in data.items():
                if field in UPDATABLE_FIELDS:
                    setattr(restaurant, field, value)

            restaurant.save()
    except IntegrityError:
        raise DuplicateRestaurantError("Name should be unique!")

    return restaurant


@transaction.atomic
def delete_restaurant(*, restaurant_id: int, user: User) -> None:
    """
    Delete a restaurant together with its menu.

    Raises:
        RestaurantNotFoundError: If restaurant doesn't exist
        NotRestaurantOwnerError: If user is not the owner
    """
    try:
        restaurant = (
            Restaurant.objects
            .select_for_update()
            .get(id=restaurant_id)
        )
    except Restaurant.DoesNotExist:
        raise RestaurantNotFoundError(f"Restaurant {restaurant_id} not found")

    _check_owner(restaurant, user)

    logger.info("User %s deleted restaurant %s (id=%s)", user.pk, restaurant.name, restaurant.pk)
    restaurant.delete()
