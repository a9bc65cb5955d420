import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.restaurants.models import Restaurant, Menu


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def buyer(db):
    """Create and return a user with 50.00 to spend."""
    return User.objects.create_user(
        name='hungry',
        password='TestPass123!',
        cash_balance=Decimal('50.00'),
    )


@pytest.fixture
def poor_buyer(db):
    """Create and return a user with almost no money."""
    return User.objects.create_user(
        name='broke',
        password='TestPass123!',
        cash_balance=Decimal('1.00'),
    )


@pytest.fixture
def restaurant_owner(db):
    """Create and return the owner of the test restaurants."""
    return User.objects.create_user(
        name='chef',
        password='TestPass123!',
    )


@pytest.fixture
def buyer_client(buyer):
    """Return an API client with a bearer token for the buyer."""
    client = APIClient()
    refresh = RefreshToken.for_user(buyer)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def poor_client(poor_buyer):
    """Return an API client authenticated as the poor buyer."""
    client = APIClient()
    client.force_authenticate(user=poor_buyer)
    return client


@pytest.fixture
def sushi_restaurant(restaurant_owner):
    return Restaurant.objects.create(name='Sushi Palace', owner=restaurant_owner)


@pytest.fixture
def taco_restaurant(restaurant_owner):
    return Restaurant.objects.create(name='Taco Stand', owner=restaurant_owner)


@pytest.fixture
def nigiri(sushi_restaurant):
    return Menu.objects.create(restaurant=sushi_restaurant, dish_name='Salmon Nigiri', price=Decimal('8.50'))


@pytest.fixture
def miso(sushi_restaurant):
    return Menu.objects.create(restaurant=sushi_restaurant, dish_name='Miso Soup', price=Decimal('3.00'))


@pytest.fixture
def taco(taco_restaurant):
    return Menu.objects.create(restaurant=taco_restaurant, dish_name='Fish Taco', price=Decimal('5.65'))
