from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema
from .models import Restaurant, Menu
from .permissions import IsRestaurantOwnerOrReadOnly
from .serializers import (
    RestaurantSerializer,
    RestaurantCreateSerializer,
    RestaurantListSerializer,
    RestaurantFilterSerializer,
    RestaurantSearchQuerySerializer,
    RestaurantSearchPageSerializer,
    MenuSerializer,
)
from .services import (
    create_restaurant,
    update_restaurant,
    delete_restaurant,
    create_menu,
    update_menu,
    delete_menu,
    search_restaurants,
    filter_restaurants,
    DuplicateRestaurantError,
    DuplicateMenuError,
    RestaurantNotFoundError,
    MenuNotFoundError,
    NotRestaurantOwnerError,
    InvalidOpeningHoursError,
)


class RestaurantPagination(PageNumberPagination):
    """Custom pagination for restaurants."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class RestaurantViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Restaurant CRUD operations.

    list: Get all restaurants (with filters, without menus)
    create: Create a new restaurant owned by the caller
    retrieve: Get a specific restaurant with its menu
    update: Update a restaurant (owner only)
    partial_update: Partially update a restaurant (owner only)
    destroy: Delete a restaurant (owner only)
    """

    queryset = Restaurant.objects.select_related('owner').prefetch_related('menus')
    serializer_class = RestaurantSerializer
    permission_classes = [IsAuthenticatedOrReadOnly, IsRestaurantOwnerOrReadOnly]
    pagination_class = RestaurantPagination

    def get_queryset(self):
        """Filter restaurants using input serializer validation (list only)."""
        if self.action != 'list':
            return super().get_queryset()

        filter_serializer = RestaurantFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        return filter_restaurants(**filter_serializer.validated_data)

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return RestaurantListSerializer
        elif self.action in ['create', 'update', 'partial_update']:
            return RestaurantCreateSerializer
        elif self.action == 'add_menu':
            return MenuSerializer
        return RestaurantSerializer

    def create(self, request, *args, **kwargs):
        """Create a new restaurant."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            restaurant = create_restaurant(
                owner=request.user,
                **serializer.validated_data
            )
        except DuplicateRestaurantError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_409_CONFLICT
            )
        except InvalidOpeningHoursError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        output_serializer = RestaurantSerializer(restaurant)
        return Response(
            output_serializer.data,
            status=status.HTTP_201_CREATED
        )

    def update(self, request, *args, **kwargs):
        """Update name and/or opening hours."""
        partial = kwargs.pop('partial', False)
        restaurant = self.get_object()

        serializer = self.get_serializer(restaurant, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            restaurant = update_restaurant(
                restaurant_id=restaurant.id,
                user=request.user,
                data=serializer.validated_data,
            )
        except RestaurantNotFoundError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_404_NOT_FOUND
            )
        except NotRestaurantOwnerError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_403_FORBIDDEN
            )
        except DuplicateRestaurantError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_409_CONFLICT
            )
        except InvalidOpeningHoursError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(RestaurantSerializer(restaurant).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a restaurant and its menu."""
        restaurant = self.get_object()

        try:
            delete_restaurant(restaurant_id=restaurant.id, user=request.user)
        except RestaurantNotFoundError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_404_NOT_FOUND
            )
        except NotRestaurantOwnerError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_403_FORBIDDEN
            )

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        request=MenuSerializer,
        responses={201: MenuSerializer},
        description="Add a dish to the restaurant's menu (owner only).",
        tags=['restaurants'],
    )
    @action(detail=True, methods=['post'], url_path='menus')
    def add_menu(self, request, pk=None):
        """
        Add a dish to this restaurant.

        POST /api/restaurants/{id}/menus/
        """
        restaurant = self.get_object()

        serializer = MenuSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            menu = create_menu(
                restaurant_id=restaurant.id,
                user=request.user,
                **serializer.validated_data
            )
        except NotRestaurantOwnerError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_403_FORBIDDEN
            )
        except DuplicateMenuError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_409_CONFLICT
            )

        return Response(MenuSerializer(menu).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        parameters=[RestaurantSearchQuerySerializer],
        responses={200: RestaurantSearchPageSerializer},
        description="Rank restaurants by relevance of their name and dishes to the query.",
        tags=['restaurants'],
    )
    @action(detail=False, methods=['get'])
    def search(self, request):
        """
        Relevance search over restaurant and dish names.

        GET /api/restaurants/search/?q=sushi&page=1&page_size=10
        """
        query_serializer = RestaurantSearchQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)
        params = query_serializer.validated_data

        result = search_restaurants(
            query=params['q'],
            page=params['page'],
            page_size=params.get('page_size'),
        )
        return Response(RestaurantSearchPageSerializer(result).data)


class MenuViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for menu items.

    Menu items are created through POST /api/restaurants/{id}/menus/.
    """

    queryset = Menu.objects.select_related('restaurant')
    serializer_class = MenuSerializer
    permission_classes = [IsAuthenticatedOrReadOnly, IsRestaurantOwnerOrReadOnly]
    pagination_class = RestaurantPagination

    def get_queryset(self):
        """Filter menu items by restaurant if specified."""
        queryset = super().get_queryset()

        restaurant_id = self.request.query_params.get('restaurant')
        if restaurant_id and restaurant_id.isdigit():
            queryset = queryset.filter(restaurant_id=restaurant_id)

        return queryset

    def update(self, request, *args, **kwargs):
        """Update dish name and/or price."""
        partial = kwargs.pop('partial', False)
        menu = self.get_object()

        serializer = self.get_serializer(menu, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            menu = update_menu(
                menu_id=menu.id,
                user=request.user,
                data=serializer.validated_data,
            )
        except MenuNotFoundError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_404_NOT_FOUND
            )
        except NotRestaurantOwnerError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_403_FORBIDDEN
            )
        except DuplicateMenuError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_409_CONFLICT
            )

        return Response(MenuSerializer(menu).data)

    def destroy(self, request, *args, **kwargs):
        """Remove a dish from the menu."""
        menu = self.get_object()

        try:
            delete_menu(menu_id=menu.id, user=request.user)
        except MenuNotFoundError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_404_NOT_FOUND
            )
        except NotRestaurantOwnerError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_403_FORBIDDEN
            )

        return Response(status=status.HTTP_204_NO_CONTENT)
