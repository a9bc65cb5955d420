from rest_framework import mixins, viewsets, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema
from .serializers import PurchaseRequestSerializer, PurchaseHistorySerializer
from .services import PurchaseService


class PurchasePagination(PageNumberPagination):
    """Custom pagination for purchase history."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class PurchaseViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    ViewSet for dish purchases.

    list: Get the current user's purchase history (newest first)
    create: Buy dishes with the current user's cash balance
    """

    serializer_class = PurchaseHistorySerializer
    permission_classes = [IsAuthenticated]
    pagination_class = PurchasePagination

    def get_queryset(self):
        """Only the caller's own purchases."""
        return PurchaseService.get_purchase_history(user=self.request.user)

    @extend_schema(
        request=PurchaseRequestSerializer,
        responses={201: PurchaseHistorySerializer(many=True)},
        description="Buy dishes. Creates one history record per purchased unit.",
        tags=['purchases'],
    )
    def create(self, request, *args, **kwargs):
        """
        Purchase dishes.

        POST /api/purchases/
        Body: {"items": [{"menu_id": 1, "quantity": 2}]}
        """
        input_serializer = PurchaseRequestSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        # InvalidMenuItemError / PaymentRequiredError propagate as 400 / 402
        records = PurchaseService.purchase_dishes(
            user=request.user,
            items=input_serializer.validated_data['items'],
        )

        serializer = PurchaseHistorySerializer(records, many=True)
        return Response(serializer.data, status=status.HTTP_201_CREATED)
