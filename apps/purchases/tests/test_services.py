"""
Service layer tests for purchases app.

Covers:
- Total calculation
- Purchase settlement (records, credits, debit)
- All-or-nothing behaviour on failure
"""

import pytest
from decimal import Decimal
from unittest import mock

from apps.purchases.services import PurchaseService
from apps.purchases.exceptions import (
    PurchaseServiceError,
    EmptyPurchaseError,
    InvalidMenuItemError,
    PaymentRequiredError,
)
from apps.purchases.models import PurchaseHistory
from apps.restaurants.models import Menu


@pytest.mark.django_db
class TestCalculateTotal:

    def test_sum_of_price_times_quantity(self, nigiri, miso):
        total = PurchaseService.calculate_total([(nigiri, 2), (miso, 1)])

        assert total == Decimal('20.00')

    def test_decimal_precision(self, taco, restaurant_owner):
        """Cent amounts add up without float drift."""
        cheap = Menu.objects.create(restaurant=taco.restaurant, dish_name='Salsa', price=Decimal('1.02'))

        assert PurchaseService.calculate_total([(cheap, 1), (taco, 1)]) == Decimal('6.67')

    def test_empty(self):
        assert PurchaseService.calculate_total([]) == Decimal('0.00')


@pytest.mark.django_db
class TestPurchaseDishes:

    def test_records_snapshot_menu(self, buyer, nigiri):
        records = PurchaseService.purchase_dishes(
            user=buyer,
            items=[{'menu_id': nigiri.id, 'quantity': 1}],
        )

        record = records[0]
        assert record.user == buyer
        assert record.menu == nigiri
        assert record.dish_name == 'Salmon Nigiri'
        assert record.restaurant_name == 'Sushi Palace'
        assert record.transaction_amount == Decimal('8.50')

    def test_same_dish_twice_in_request(self, buyer, miso, sushi_restaurant):
        """Repeated lines for one dish are each charged."""
        records = PurchaseService.purchase_dishes(
            user=buyer,
            items=[
                {'menu_id': miso.id, 'quantity': 1},
                {'menu_id': miso.id, 'quantity': 2},
            ],
        )

        assert len(records) == 3
        sushi_restaurant.refresh_from_db()
        assert sushi_restaurant.cash_balance == Decimal('9.00')

    def test_empty_items(self, buyer):
        with pytest.raises(EmptyPurchaseError):
            PurchaseService.purchase_dishes(user=buyer, items=[])

    def test_non_positive_quantity(self, buyer, nigiri):
        with pytest.raises(EmptyPurchaseError):
            PurchaseService.purchase_dishes(
                user=buyer,
                items=[{'menu_id': nigiri.id, 'quantity': 0}],
            )

    def test_unknown_menu(self, buyer):
        with pytest.raises(InvalidMenuItemError):
            PurchaseService.purchase_dishes(
                user=buyer,
                items=[{'menu_id': 99999, 'quantity': 1}],
            )

    def test_payment_required(self, poor_buyer, nigiri):
        with pytest.raises(PaymentRequiredError):
            PurchaseService.purchase_dishes(
                user=poor_buyer,
                items=[{'menu_id': nigiri.id, 'quantity': 1}],
            )

    def test_exceptions_share_base_class(self):
        assert issubclass(InvalidMenuItemError, PurchaseServiceError)
        assert issubclass(PaymentRequiredError, PurchaseServiceError)
        assert PaymentRequiredError.status_code == 402

    def test_failure_midway_rolls_back(self, buyer, nigiri, taco, sushi_restaurant):
        """An error after some units were recorded leaves no trace."""
        original_create = PurchaseHistory.objects.create
        calls = []

        def failing_create(**kwargs):
            calls.append(kwargs)
            if len(calls) == 2:
                raise RuntimeError('database went away')
            return original_create(**kwargs)

        with mock.patch.object(PurchaseHistory.objects, 'create', side_effect=failing_create):
            with pytest.raises(RuntimeError):
                PurchaseService.purchase_dishes(
                    user=buyer,
                    items=[
                        {'menu_id': nigiri.id, 'quantity': 1},
                        {'menu_id': taco.id, 'quantity': 1},
                    ],
                )

        buyer.refresh_from_db()
        sushi_restaurant.refresh_from_db()
        assert PurchaseHistory.objects.count() == 0
        assert sushi_restaurant.cash_balance == Decimal('0.00')
        assert buyer.cash_balance == Decimal('50.00')

    def test_history_newest_first(self, buyer, nigiri, miso):
        PurchaseService.purchase_dishes(user=buyer, items=[{'menu_id': nigiri.id, 'quantity': 1}])
        PurchaseService.purchase_dishes(user=buyer, items=[{'menu_id': miso.id, 'quantity': 1}])

        history = list(PurchaseService.get_purchase_history(user=buyer))

        assert [h.dish_name for h in history] == ['Miso Soup', 'Salmon Nigiri']
