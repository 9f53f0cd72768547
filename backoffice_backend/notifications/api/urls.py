# notifications/api/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from notifications.api.views import NotificationViewSet

# empty prefix: SimpleRouter, so no API-root view shadows the list route
router = SimpleRouter()
router.register("", NotificationViewSet, basename="notifications")

urlpatterns = [
    path("", include(router.urls)),
]
