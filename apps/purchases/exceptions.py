"""
Domain exceptions for purchases app.

Errors that map directly onto an HTTP status are also DRF APIExceptions,
so views can let them propagate to the exception handler.
"""
from rest_framework.exceptions import APIException


class PurchaseServiceError(Exception):
    """Base exception for purchase service errors."""
    pass


class EmptyPurchaseError(PurchaseServiceError, APIException):
    """Purchase request without any items."""
    status_code = 400
    default_detail = 'At least one item is required.'
    default_code = 'empty_purchase'


class InvalidMenuItemError(PurchaseServiceError, APIException):
    """Referenced menu item does not exist."""
    status_code = 400
    default_detail = 'Invalid menu ID'
    default_code = 'invalid_menu_id'


class PaymentRequiredError(PurchaseServiceError, APIException):
    """Buyer's balance does not cover the purchase."""
    status_code = 402
    default_detail = 'Payment required'
    default_code = 'payment_required'
