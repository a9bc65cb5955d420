"""
Purchase Services Module
=========================

This module provides the business logic for buying dishes: validating the
order, charging the buyer and crediting each restaurant.

Classes:
    PurchaseService: Handles purchases and purchase history.

Example:
    Buying two dishes::

        from apps.purchases.services import PurchaseService

        records = PurchaseService.purchase_dishes(
            user=current_user,
            items=[
                {'menu_id': nigiri.id, 'quantity': 2},
                {'menu_id': soup.id, 'quantity': 1},
            ],
        )

        # One record per unit: 3 records here
        for record in records:
            print(f"{record.dish_name}: {record.transaction_amount}")
"""

import logging
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.restaurants.models import Menu, Restaurant
from .exceptions import EmptyPurchaseError, InvalidMenuItemError, PaymentRequiredError
from .models import PurchaseHistory

logger = logging.getLogger(__name__)

User = get_user_model()


class PurchaseService:
    """
    Service for purchasing dishes and settling balances.

    A purchase moves money from the buyer to the restaurants that own the
    purchased dishes. The whole request is one transaction with the buyer
    row locked, so either every unit is recorded and paid for or nothing
    changes.

    Methods:
        purchase_dishes: Buy menu items, one history record per unit.
        calculate_total: Sum of unit price times quantity.
        get_purchase_history: A user's purchase records, newest first.
    """

    @staticmethod
    def purchase_dishes(*, user, items):
        """
        Buy menu items on behalf of ``user``.

        Steps:
            1. Lock the buyer row (SELECT FOR UPDATE).
            2. Resolve every referenced menu item; any unknown ID fails
               the whole purchase.
            3. Compare the total against the buyer's balance.
            4. For every unit create a PurchaseHistory record and credit
               the restaurant with the unit price.
            5. Debit the buyer once by the total.

        Args:
            user (User): The buyer.
            items (list[dict]): Line items, each with ``menu_id`` (int) and
                ``quantity`` (int, at least 1).

        Returns:
            list[PurchaseHistory]: Created records, one per purchased unit,
            in request order.

        Raises:
            EmptyPurchaseError: If ``items`` is empty or a quantity is below 1.
            InvalidMenuItemError: If a menu ID does not exist.
            PaymentRequiredError: If the buyer's balance is below the total.

        Note:
            Balances are updated with F() expressions so concurrent
            purchases at the same restaurant never lose a credit.
        """
        if not items:
            raise EmptyPurchaseError()
        if any(item['quantity'] < 1 for item in items):
            raise EmptyPurchaseError('Quantity must be at least 1.')

        with transaction.atomic():
            buyer = User.objects.select_for_update().get(pk=user.pk)

            menu_ids = {item['menu_id'] for item in items}
            menus = Menu.objects.select_related('restaurant').in_bulk(menu_ids)
            missing = menu_ids - set(menus)
            if missing:
                logger.warning(
                    "User %s purchase rejected: unknown menu IDs %s",
                    buyer.pk, sorted(missing)
                )
                raise InvalidMenuItemError()

            lines = [(menus[item['menu_id']], item['quantity']) for item in items]
            total = PurchaseService.calculate_total(lines)

            if buyer.cash_balance < total:
                logger.warning(
                    "User %s purchase rejected: balance %s below total %s",
                    buyer.pk, buyer.cash_balance, total
                )
                raise PaymentRequiredError()

            now = timezone.now()
            records = []
            for menu, quantity in lines:
                for _ in range(quantity):
                    records.append(PurchaseHistory.objects.create(
                        user=buyer,
                        menu=menu,
                        dish_name=menu.dish_name,
                        restaurant_name=menu.restaurant.name,
                        transaction_amount=menu.price,
                        transaction_date=now,
                    ))
                    Restaurant.objects.filter(pk=menu.restaurant_id).update(
                        cash_balance=F('cash_balance') + menu.price
                    )

            User.objects.filter(pk=buyer.pk).update(
                cash_balance=F('cash_balance') - total
            )

        logger.info(
            "User %s purchased %d items for %s",
            buyer.pk, len(records), total
        )
        return records

    @staticmethod
    def calculate_total(lines):
        """
        Total price of an order.

        Args:
            lines (iterable[tuple[Menu, int]]): Menu item and quantity pairs.

        Returns:
            Decimal: Sum of ``price * quantity`` over all lines.

        Example:
            >>> PurchaseService.calculate_total([(nigiri, 2), (soup, 1)])
            Decimal('20.00')  # 8.50 * 2 + 3.00
        """
        return sum(
            (menu.price * quantity for menu, quantity in lines),
            Decimal('0.00')
        )

    @staticmethod
    def get_purchase_history(*, user):
        """
        Get a user's purchase history.

        Args:
            user (User): The buyer.

        Returns:
            QuerySet[PurchaseHistory]: Records ordered newest first.
        """
        return PurchaseHistory.objects.filter(user=user).select_related('menu')
