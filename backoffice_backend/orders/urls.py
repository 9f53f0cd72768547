# orders/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from orders.views import OrderViewSet

# empty prefix: SimpleRouter, so no API-root view shadows the list route
router = SimpleRouter()
router.register("", OrderViewSet, basename="orders")

urlpatterns = [
    path("", include(router.urls)),
]
