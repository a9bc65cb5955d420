import json
import pytest
from decimal import Decimal
from django.core.management import call_command
from django.core.management.base import CommandError
from apps.accounts.models import User
from apps.restaurants.models import Restaurant, Menu
from apps.purchases.models import PurchaseHistory


RESTAURANTS = [
    {
        'restaurantName': "'Ulu Ocean Grill and Sushi Lounge",
        'cashBalance': 4483.84,
        'openingHours': 'Mon, Weds 5:45 am - 12:30 am / Tues, Thurs - Fri 11:45 am - 5:30 pm',
        'menu': [
            {'dishName': 'Olive or Reef Potatoes', 'price': 13.18},
            {'dishName': 'Cajun Shrimp', 'price': 12.5},
        ],
    },
    {
        'restaurantName': '12th Street Diner',
        'cashBalance': 200,
        'openingHours': 'Every day, all day',
        'menu': [],
    },
]

USERS = [
    {
        'id': 0,
        'name': 'Edith Johnson',
        'cashBalance': 700.7,
        'purchaseHistory': [
            {
                'dishName': 'Cajun Shrimp',
                'restaurantName': "'Ulu Ocean Grill and Sushi Lounge",
                'transactionAmount': 12.5,
                'transactionDate': '02/10/2020 04:09 AM',
            },
            {
                'dishName': 'Postum',
                'restaurantName': 'Closed Forever Cafe',
                'transactionAmount': 13.88,
                'transactionDate': '01/05/2020 11:45 PM',
            },
        ],
    },
]


@pytest.fixture
def restaurants_file(tmp_path):
    path = tmp_path / 'restaurants.json'
    path.write_text(json.dumps(RESTAURANTS))
    return str(path)


@pytest.fixture
def users_file(tmp_path):
    path = tmp_path / 'users.json'
    path.write_text(json.dumps(USERS))
    return str(path)


@pytest.mark.django_db
class TestLoadMarketplaceData:
    """Tests for the load_marketplace_data management command."""

    def test_load_restaurants(self, restaurants_file):
        call_command('load_marketplace_data', restaurants=restaurants_file)

        restaurant = Restaurant.objects.get(name="'Ulu Ocean Grill and Sushi Lounge")
        assert restaurant.cash_balance == Decimal('4483.84')
        assert restaurant.owner.name == 'marketplace'
        assert not restaurant.owner.has_usable_password()
        assert restaurant.menus.get(dish_name='Cajun Shrimp').price == Decimal('12.50')

    def test_unparseable_hours_are_kept(self, restaurants_file):
        """Restaurants with odd hours are imported, just never open."""
        call_command('load_marketplace_data', restaurants=restaurants_file)

        assert Restaurant.objects.get(name='12th Street Diner').opening_hours == 'Every day, all day'

    def test_load_users_with_history(self, restaurants_file, users_file):
        call_command('load_marketplace_data', restaurants=restaurants_file, users=users_file)

        user = User.objects.get(name='Edith Johnson')
        assert user.cash_balance == Decimal('700.70')
        assert not user.has_usable_password()

        history = {h.dish_name: h for h in PurchaseHistory.objects.filter(user=user)}
        assert history['Cajun Shrimp'].menu == Menu.objects.get(dish_name='Cajun Shrimp')
        assert history['Cajun Shrimp'].transaction_date.year == 2020
        assert history['Postum'].menu is None
        assert history['Postum'].transaction_amount == Decimal('13.88')

    def test_reload_is_idempotent_for_restaurants(self, restaurants_file):
        call_command('load_marketplace_data', restaurants=restaurants_file)
        call_command('load_marketplace_data', restaurants=restaurants_file)

        assert Restaurant.objects.count() == 2
        assert Menu.objects.count() == 2

    def test_reload_users_does_not_duplicate_history(self, restaurants_file, users_file):
        call_command('load_marketplace_data', restaurants=restaurants_file, users=users_file)
        call_command('load_marketplace_data', users=users_file)

        assert PurchaseHistory.objects.filter(user__name='Edith Johnson').count() == 2

    def test_clear(self, restaurants_file, users_file):
        call_command('load_marketplace_data', restaurants=restaurants_file, users=users_file)
        real_user = User.objects.create_user(name='realperson', password='TestPass123!')

        call_command('load_marketplace_data', clear=True)

        assert Restaurant.objects.count() == 0
        assert PurchaseHistory.objects.count() == 0
        assert list(User.objects.all()) == [real_user]

    def test_custom_owner(self, restaurants_file):
        call_command('load_marketplace_data', restaurants=restaurants_file, owner='importer')

        assert set(Restaurant.objects.values_list('owner__name', flat=True)) == {'importer'}

    def test_nothing_to_do(self, db):
        with pytest.raises(CommandError):
            call_command('load_marketplace_data')

    def test_missing_file(self, db, tmp_path):
        with pytest.raises(CommandError):
            call_command('load_marketplace_data', restaurants=str(tmp_path / 'missing.json'))
