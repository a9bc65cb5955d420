"""Account management service."""

import logging
from decimal import Decimal
from typing import Optional

from django.db import transaction
from django.db.models import F
from django.contrib.auth import get_user_model

from .exceptions import InvalidAmountError, InvalidCredentialsError

User = get_user_model()

logger = logging.getLogger(__name__)


def _get_verified_user(user_id: int, name: str, password: str) -> User:
    """Lock the user row and confirm name and password belong to it."""
    user = (
        User.objects
        .select_for_update()
        .get(id=user_id)
    )

    if user.name != name or not user.check_password(password):
        raise InvalidCredentialsError("Password not the same!")

    return user


@transaction.atomic
def change_credentials(
    *,
    user_id: int,
    name: str,
    password: str,
    new_password: Optional[str] = None,
    email: Optional[str] = None
) -> User:
    """
    Change the password and/or email of an account.

    Args:
        user_id: ID of the authenticated user
        name: User name, must match the authenticated user
        password: Current password for confirmation
        new_password: Replacement password, if changing it
        email: New email address, if changing it

    Returns:
        Updated User instance

    Raises:
        InvalidCredentialsError: If name or current password is wrong
    """
    user = _get_verified_user(user_id, name, password)

    update_fields = []
    if new_password:
        user.set_password(new_password)
        update_fields.append('password')
    if email is not None:
        user.email = email or None
        update_fields.append('email')

    if update_fields:
        user.save(update_fields=update_fields)

    return user


@transaction.atomic
def delete_user_account(*, user_id: int, name: str, password: str) -> None:
    """
    Permanently delete an account and everything it owns.

    Args:
        user_id: ID of the authenticated user
        name: User name, must match the authenticated user
        password: User's password for confirmation

    Raises:
        InvalidCredentialsError: If name or password is wrong
    """
    user = _get_verified_user(user_id, name, password)
    logger.info("Deleting user %s (id=%s)", user.name, user.pk)
    user.delete()


@transaction.atomic
def top_up_balance(*, user_id: int, amount: Decimal) -> User:
    """
    Add money to a user's cash balance.

    Args:
        user_id: ID of the user to credit
        amount: Positive amount to add

    Returns:
        User instance with the refreshed balance

    Raises:
        InvalidAmountError: If amount is not positive
    """
    if amount is None or amount <= 0:
        raise InvalidAmountError("Top-up amount must be positive")

    User.objects.filter(id=user_id).update(cash_balance=F('cash_balance') + amount)
    user = User.objects.get(id=user_id)

    logger.info("Topped up user %s by %s (balance=%s)", user.pk, amount, user.cash_balance)
    return user
