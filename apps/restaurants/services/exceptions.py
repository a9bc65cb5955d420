"""Domain-specific exceptions for restaurants services."""


class RestaurantsServiceError(Exception):
    """Base exception for restaurants services."""
    pass


class RestaurantNotFoundError(RestaurantsServiceError):
    """Raised when restaurant does not exist."""
    pass


class DuplicateRestaurantError(RestaurantsServiceError):
    """Raised when a restaurant name is already taken."""
    pass


class MenuNotFoundError(RestaurantsServiceError):
    """Raised when menu item does not exist."""
    pass


class DuplicateMenuError(RestaurantsServiceError):
    """Raised when a restaurant already offers a dish with the same name."""
    pass


class NotRestaurantOwnerError(RestaurantsServiceError):
    """Raised when a non-owner tries to modify a restaurant or its menu."""
    pass


class InvalidOpeningHoursError(RestaurantsServiceError):
    """Raised when an opening hours string cannot be parsed."""
    pass
