# backend/urls.py

from django.conf import settings
from django.contrib import admin
from django.db import DatabaseError, connections
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.utils import extend_schema
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

MODULES = {
    "auth": "/api/auth/",
    "users": "/api/users/",
    "products": "/api/products/",
    "orders": "/api/orders/",
    "accounting": "/api/accounting/",
    "notifications": "/api/notifications/",
    "purchases": "/api/purchases/",
}


@extend_schema(responses={200: dict})
@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request):
    return Response(
        {
            "message": "Shop Back-Office API is running",
            "docs": {"swagger": "/api/docs/", "schema": "/api/schema/"},
            "modules": MODULES,
        }
    )


@extend_schema(responses={200: dict, 503: dict})
@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    """200 when the default database answers a trivial query, 503 otherwise."""
    try:
        with connections["default"].cursor() as cursor:
            cursor.execute("SELECT 1;")
            cursor.fetchone()
    except DatabaseError as exc:
        return Response({"status": "degraded", "db": "down", "error": str(exc)}, status=503)
    return Response({"status": "ok", "db": "ok"})


# ADMIN_PATH comes from the environment; always slash-terminated
ADMIN_PATH = settings.ADMIN_PATH.rstrip("/") + "/"

api_urlpatterns = [
    path("", api_root, name="api-root"),
    path("health/", health_check, name="health-check"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("auth/jwt/create/", TokenObtainPairView.as_view(), name="jwt-create"),
    path("auth/jwt/refresh/", TokenRefreshView.as_view(), name="jwt-refresh"),
    # auth/* and users/*
    path("", include("users.urls")),
    path("products/", include("products.urls")),
    path("orders/", include("orders.urls")),
    path("accounting/", include("accounting.api.urls")),
    path("notifications/", include("notifications.api.urls")),
    path("purchases/", include("purchases.api.urls")),
]

urlpatterns = [
    path(ADMIN_PATH, admin.site.urls),
    path("", RedirectView.as_view(url="/api/docs/", permanent=False), name="root"),
    path("api/", include(api_urlpatterns)),
]
