"""Restaurant relevance search and listing filters."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union
import re

from django.conf import settings
from django.db.models import Count, Q, QuerySet
from fuzzywuzzy import fuzz

from ..models import Restaurant
from .exceptions import InvalidOpeningHoursError
from .opening_hours import is_open_at

logger = logging.getLogger(__name__)


def normalize_text(text: str) -> str:
    """
    Normalize text for comparison.

    Args:
        text: Text to normalize

    Returns:
        Normalized lowercase text
    """
    text = re.sub(r'[^\w\s-]', '', text.lower())
    text = re.sub(r'\s+', ' ', text).strip()
    return text


def score_restaurant(
    *,
    query: str,
    restaurant: Restaurant,
    dish_penalty: Optional[int] = None
) -> int:
    """
    Relevance of a restaurant for a search query (0-100).

    The restaurant name is scored directly; every dish name is scored with
    ``dish_penalty`` subtracted, so a dish match never outranks an equally
    good restaurant-name match. The best of these scores is returned.

    Args:
        query: Raw search query
        restaurant: Restaurant with its menus (prefetch them for bulk scoring)
        dish_penalty: Points subtracted from dish matches
            (defaults to settings.RESTAURANT_SEARCH_DISH_PENALTY)

    Returns:
        Relevance score
    """
    if dish_penalty is None:
        dish_penalty = settings.RESTAURANT_SEARCH_DISH_PENALTY

    query = normalize_text(query)
    best = fuzz.partial_ratio(query, normalize_text(restaurant.name))

    for menu in restaurant.menus.all():
        dish_score = fuzz.partial_ratio(query, normalize_text(menu.dish_name)) - dish_penalty
        best = max(best, dish_score)

    return max(best, 0)


def search_restaurants(
    *,
    query: str,
    page: int = 1,
    page_size: Optional[int] = None,
    dish_penalty: Optional[int] = None,
    min_score: Optional[int] = None
) -> Dict[str, Any]:
    """
    Rank restaurants by relevance to ``query`` and return one page.

    Every restaurant is scored with score_restaurant(), restaurants at or
    below ``min_score`` are dropped, the rest are sorted by descending
    score (ties by name) and sliced into pages.

    Args:
        query: Search query
        page: 1-based page number
        page_size: Results per page, capped at RESTAURANT_SEARCH_MAX_PAGE_SIZE
        dish_penalty: Points subtracted from dish-name matches
        min_score: Scores at or below this are excluded

    Returns:
        dict: A dictionary containing:
            - count (int): Number of matching restaurants over all pages.
            - page (int): The returned page number.
            - page_size (int): The page size used.
            - results (list[Restaurant]): Restaurants on this page, each
              with a ``relevance`` attribute.
    """
    if page_size is None:
        page_size = settings.RESTAURANT_SEARCH_PAGE_SIZE
    page_size = max(1, min(page_size, settings.RESTAURANT_SEARCH_MAX_PAGE_SIZE))
    page = max(page, 1)
    if min_score is None:
        min_score = settings.RESTAURANT_SEARCH_MIN_SCORE

    scored = []
    for restaurant in Restaurant.objects.prefetch_related('menus'):
        restaurant.relevance = score_restaurant(
            query=query,
            restaurant=restaurant,
            dish_penalty=dish_penalty,
        )
        if restaurant.relevance > min_score:
            scored.append(restaurant)

    scored.sort(key=lambda r: (-r.relevance, r.name))

    start = (page - 1) * page_size
    results = scored[start:start + page_size]

    logger.debug("Search %r matched %d restaurants", query, len(scored))

    return {
        'count': len(scored),
        'page': page,
        'page_size': page_size,
        'results': results,
    }


def filter_restaurants(
    *,
    search: Optional[str] = None,
    open_at: Optional[datetime] = None,
    price_min: Optional[Decimal] = None,
    price_max: Optional[Decimal] = None,
    more_than: Optional[int] = None,
    less_than: Optional[int] = None
) -> Union[QuerySet, List[Restaurant]]:
    """
    Filter restaurants for listing.

    Args:
        search: Case-insensitive substring of the restaurant name
        open_at: Only restaurants open at this moment
        price_min: Lower bound (inclusive) of dish prices to count
        price_max: Upper bound (inclusive) of dish prices to count
        more_than: Only restaurants with more dishes in the price range
        less_than: Only restaurants with fewer dishes in the price range

    Returns:
        Restaurants ordered by name; a list when ``open_at`` is given,
        since opening hours are evaluated in Python
    """
    queryset = Restaurant.objects.select_related('owner')

    if search:
        queryset = queryset.filter(name__icontains=search)

    if any(value is not None for value in (price_min, price_max, more_than, less_than)):
        price_filter = Q()
        if price_min is not None:
            price_filter &= Q(menus__price__gte=price_min)
        if price_max is not None:
            price_filter &= Q(menus__price__lte=price_max)

        if price_filter:
            queryset = queryset.annotate(dish_count=Count('menus', filter=price_filter))
        else:
            queryset = queryset.annotate(dish_count=Count('menus'))

        if more_than is not None:
            queryset = queryset.filter(dish_count__gt=more_than)
        if less_than is not None:
            queryset = queryset.filter(dish_count__lt=less_than)

    queryset = queryset.order_by('name')

    if open_at is None:
        return queryset

    restaurants = []
    for restaurant in queryset:
        try:
            if is_open_at(restaurant.opening_hours, open_at):
                restaurants.append(restaurant)
        except InvalidOpeningHoursError as e:
            logger.warning("Skipping restaurant %s: %s", restaurant.pk, e)

    return restaurants
