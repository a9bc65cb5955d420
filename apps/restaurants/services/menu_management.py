"""Menu item CRUD operations service."""

from decimal import Decimal
from typing import Any, Dict

from django.db import IntegrityError, transaction
from django.contrib.auth import get_user_model

from ..models import Menu, Restaurant
from .exceptions import (
    DuplicateMenuError,
    MenuNotFoundError,
    NotRestaurantOwnerError,
    RestaurantNotFoundError,
)

User = get_user_model()

UPDATABLE_FIELDS = ('dish_name', 'price')


def _dish_taken(restaurant_id: int, dish_name: str, exclude_id: int = None) -> bool:
    queryset = Menu.objects.filter(restaurant_id=restaurant_id, dish_name=dish_name)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    return queryset.exists()


def _get_owned_menu(menu_id: int, user: User) -> Menu:
    try:
        menu = (
            Menu.objects
            .select_for_update()
            .select_related('restaurant')
            .get(id=menu_id)
        )
    except Menu.DoesNotExist:
        raise MenuNotFoundError(f"Menu {menu_id} not found")

    if not menu.restaurant.is_owned_by(user):
        raise NotRestaurantOwnerError("Restaurant owner required")

    return menu


def create_menu(
    *,
    restaurant_id: int,
    user: User,
    dish_name: str,
    price: Decimal
) -> Menu:
    """
    Add a dish to a restaurant's menu.

    Raises:
        RestaurantNotFoundError: If restaurant doesn't exist
        NotRestaurantOwnerError: If user is not the restaurant owner
        DuplicateMenuError: If the restaurant already has this dish
    """
    try:
        restaurant = Restaurant.objects.get(id=restaurant_id)
    except Restaurant.DoesNotExist:
        raise RestaurantNotFoundError(f"Restaurant {restaurant_id} not found")

    if not restaurant.is_owned_by(user):
        raise NotRestaurantOwnerError("Restaurant owner required")

    if _dish_taken(restaurant.id, dish_name):
        raise DuplicateMenuError(f"Dish '{dish_name}' already exists in this restaurant")

    try:
        with transaction.atomic():
            return Menu.objects.create(
                restaurant=restaurant,
                dish_name=dish_name,
                price=price,
            )
    except IntegrityError:
        raise DuplicateMenuError(f"Dish '{dish_name}' already exists in this restaurant")


def update_menu(*, menu_id: int, user: User, data: Dict[str, Any]) -> Menu:
    """
    Update dish name and/or price of a menu item.

    Raises:
        MenuNotFoundError: If menu item doesn't exist
        NotRestaurantOwnerError: If user does not own the restaurant
        DuplicateMenuError: If the new dish name is already on the menu
    """
    try:
        with transaction.atomic():
            menu = _get_owned_menu(menu_id, user)

            if 'dish_name' in data and _dish_taken(menu.restaurant_id, data['dish_name'], exclude_id=menu.id):
                raise DuplicateMenuError(f"Dish '{data['dish_name']}' already exists in this restaurant")

            for field, value in data.items():
                if field in UPDATABLE_FIELDS:
                    setattr(menu, field, value)

            menu.save()
    except IntegrityError:
        raise DuplicateMenuError("Dish already exists in this restaurant")

    return menu


@transaction.atomic
def delete_menu(*, menu_id: int, user: User) -> None:
    """
    Remove a dish from a restaurant's menu.

    Raises:
        MenuNotFoundError: If menu item doesn't exist
        NotRestaurantOwnerError: If user does not own the restaurant
    """
    menu = _get_owned_menu(menu_id, user)
    menu.delete()
