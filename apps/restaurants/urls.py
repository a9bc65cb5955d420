from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'restaurants'

# Router for ViewSets
# Note: menus must be registered BEFORE empty prefix to avoid URL conflicts
router = SimpleRouter()
router.register(r'menus', views.MenuViewSet, basename='menu')
router.register(r'', views.RestaurantViewSet, basename='restaurant')

urlpatterns = [
    # Restaurant ViewSet routes
    # GET    /api/restaurants/              - List restaurants (filters: search, open_at,
    #                                         price_min, price_max, more_than, less_than)
    # POST   /api/restaurants/              - Create restaurant
    # GET    /api/restaurants/{id}/         - Get restaurant with menu
    # PUT    /api/restaurants/{id}/         - Update restaurant (owner)
    # PATCH  /api/restaurants/{id}/         - Partial update (owner)
    # DELETE /api/restaurants/{id}/         - Delete restaurant (owner)

    # Custom actions
    # GET    /api/restaurants/search/       - Relevance search with pagination
    # POST   /api/restaurants/{id}/menus/   - Add dish (owner)

    # Menu routes
    # GET    /api/restaurants/menus/           - List menu items (?restaurant=<id>)
    # GET    /api/restaurants/menus/{id}/      - Get menu item
    # PUT    /api/restaurants/menus/{id}/      - Update menu item (owner)
    # PATCH  /api/restaurants/menus/{id}/      - Partial update (owner)
    # DELETE /api/restaurants/menus/{id}/      - Delete menu item (owner)

    # Include router URLs
    path('', include(router.urls)),
]
