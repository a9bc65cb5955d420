"""
Service layer tests for accounts app.

Covers registration, authentication, credential changes, account deletion
and balance top-ups.
"""

import pytest
from decimal import Decimal

from apps.accounts.models import User
from apps.accounts.services import (
    register_user,
    authenticate_user,
    change_credentials,
    delete_user_account,
    top_up_balance,
)
from apps.accounts.services.exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidAmountError,
)


@pytest.mark.django_db
class TestRegisterUser:

    def test_register_hashes_password(self):
        user = register_user(name='alice', password='SecurePass123!')

        assert user.pk is not None
        assert user.password != 'SecurePass123!'
        assert user.check_password('SecurePass123!')
        assert user.cash_balance == Decimal('0.00')

    def test_register_normalizes_email(self):
        user = register_user(name='bob', password='SecurePass123!', email='Bob@EXAMPLE.com')

        assert user.email == 'Bob@example.com'

    def test_register_duplicate(self, user):
        with pytest.raises(DuplicateUserError):
            register_user(name=user.name, password='SecurePass123!')


@pytest.mark.django_db
class TestAuthenticateUser:

    def test_authenticate_success(self, user):
        authenticated = authenticate_user(name='testuser', password='TestPass123!')

        assert authenticated == user
        assert authenticated.last_login is not None

    def test_authenticate_wrong_password(self, user):
        with pytest.raises(InvalidCredentialsError, match='Credentials incorrect'):
            authenticate_user(name='testuser', password='nope')

    def test_authenticate_inactive(self, user_inactive):
        with pytest.raises(InactiveAccountError):
            authenticate_user(name='inactive', password='TestPass123!')


@pytest.mark.django_db
class TestChangeCredentials:

    def test_clear_email(self, user):
        updated = change_credentials(
            user_id=user.id,
            name='testuser',
            password='TestPass123!',
            email='',
        )

        assert updated.email is None

    def test_nothing_to_change(self, user):
        """Confirming credentials without changes is a no-op."""
        updated = change_credentials(user_id=user.id, name='testuser', password='TestPass123!')

        assert updated.email == 'testuser@example.com'

    def test_wrong_password(self, user):
        with pytest.raises(InvalidCredentialsError, match='Password not the same!'):
            change_credentials(
                user_id=user.id,
                name='testuser',
                password='wrong',
                new_password='Another123!',
            )


@pytest.mark.django_db
class TestDeleteUserAccount:

    def test_delete(self, user):
        delete_user_account(user_id=user.id, name='testuser', password='TestPass123!')

        assert not User.objects.filter(id=user.id).exists()

    def test_delete_wrong_name(self, user):
        with pytest.raises(InvalidCredentialsError):
            delete_user_account(user_id=user.id, name='someone', password='TestPass123!')


@pytest.mark.django_db
class TestTopUpBalance:

    def test_top_up_adds_exactly(self, user):
        updated = top_up_balance(user_id=user.id, amount=Decimal('5.65'))

        assert updated.cash_balance == Decimal('6.67')

    @pytest.mark.parametrize('amount', [Decimal('0'), Decimal('-1.00'), None])
    def test_top_up_rejects_non_positive(self, user, amount):
        with pytest.raises(InvalidAmountError):
            top_up_balance(user_id=user.id, amount=amount)
