import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from apps.accounts.models import User
from apps.restaurants.models import Restaurant, Menu


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def owner(db):
    """Create and return a restaurant owner."""
    return User.objects.create_user(
        name='owner',
        password='TestPass123!',
        email='owner@example.com',
    )


@pytest.fixture
def other_user(db):
    """Create and return a user owning nothing."""
    return User.objects.create_user(
        name='stranger',
        password='TestPass123!',
    )


@pytest.fixture
def authenticated_client(api_client, owner):
    """Return an API client authenticated as the owner."""
    api_client.force_authenticate(user=owner)
    return api_client


@pytest.fixture
def other_client(other_user):
    """Return an API client authenticated as a non-owner."""
    client = APIClient()
    client.force_authenticate(user=other_user)
    return client


@pytest.fixture
def restaurant(db, owner):
    """Create and return a sushi restaurant with a short menu."""
    restaurant = Restaurant.objects.create(
        name='Sushi Palace',
        opening_hours='Mon-Fri 11 am - 10 pm / Sat 12 pm - 2 am',
        owner=owner,
    )
    Menu.objects.create(restaurant=restaurant, dish_name='Salmon Nigiri', price=Decimal('8.50'))
    Menu.objects.create(restaurant=restaurant, dish_name='Miso Soup', price=Decimal('3.00'))
    Menu.objects.create(restaurant=restaurant, dish_name='Dragon Roll', price=Decimal('14.00'))
    return restaurant


@pytest.fixture
def restaurant_burger(db, other_user):
    """Create and return a burger place owned by another user."""
    restaurant = Restaurant.objects.create(
        name='Burger Barn',
        opening_hours='Sun 10 am - 2 pm',
        owner=other_user,
    )
    Menu.objects.create(restaurant=restaurant, dish_name='Cheeseburger', price=Decimal('9.99'))
    Menu.objects.create(restaurant=restaurant, dish_name='Salmon Burger', price=Decimal('12.50'))
    return restaurant


@pytest.fixture
def menu(restaurant):
    """Return the Salmon Nigiri menu item."""
    return restaurant.menus.get(dish_name='Salmon Nigiri')
