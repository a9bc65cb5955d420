from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'purchases'

router = SimpleRouter()
router.register(r'', views.PurchaseViewSet, basename='purchase')

urlpatterns = [
    # GET    /api/purchases/   - Purchase history of the current user
    # POST   /api/purchases/   - Buy dishes

    # Include router URLs
    path('', include(router.urls)),
]
