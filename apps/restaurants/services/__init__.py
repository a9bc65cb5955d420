"""Services for restaurants business logic."""

from .exceptions import (
    RestaurantsServiceError,
    RestaurantNotFoundError,
    DuplicateRestaurantError,
    MenuNotFoundError,
    DuplicateMenuError,
    NotRestaurantOwnerError,
    InvalidOpeningHoursError,
)
from .restaurant_management import (
    create_restaurant,
    update_restaurant,
    delete_restaurant,
    get_restaurant_by_id,
)
from .menu_management import (
    create_menu,
    update_menu,
    delete_menu,
)
from .restaurant_search import (
    normalize_text,
    score_restaurant,
    search_restaurants,
    filter_restaurants,
)
from .opening_hours import (
    OpeningPeriod,
    parse_opening_hours,
    is_open_at,
)

__all__ = [
    # Exceptions
    'RestaurantsServiceError',
    'RestaurantNotFoundError',
    'DuplicateRestaurantError',
    'MenuNotFoundError',
    'DuplicateMenuError',
    'NotRestaurantOwnerError',
    'InvalidOpeningHoursError',
    # Restaurant Management
    'create_restaurant',
    'update_restaurant',
    'delete_restaurant',
    'get_restaurant_by_id',
    # Menu Management
    'create_menu',
    'update_menu',
    'delete_menu',
    # Restaurant Search
    'normalize_text',
    'score_restaurant',
    'search_restaurants',
    'filter_restaurants',
    # Opening Hours
    'OpeningPeriod',
    'parse_opening_hours',
    'is_open_at',
]
