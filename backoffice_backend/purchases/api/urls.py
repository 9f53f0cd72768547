# purchases/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from purchases.api.views import SupplierViewSet

router = DefaultRouter()
router.register("suppliers", SupplierViewSet, basename="supplier")

urlpatterns = [
    path("", include(router.urls)),
]
