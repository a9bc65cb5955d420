"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    DuplicateUserError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidAmountError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .account_management import (
    change_credentials,
    delete_user_account,
    top_up_balance,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'DuplicateUserError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'InvalidAmountError',
    # Services
    'register_user',
    'authenticate_user',
    'change_credentials',
    'delete_user_account',
    'top_up_balance',
]
