"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class DuplicateUserError(AccountsServiceError):
    """Raised when the requested user name is already taken."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class InvalidAmountError(AccountsServiceError):
    """Raised when a balance top-up amount is not positive."""
    pass
