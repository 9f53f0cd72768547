# users/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import (
    ChangePasswordView,
    LoginView,
    LogoutView,
    MeView,
    RegisterView,
    UserViewSet,
)

app_name = "users"

router = SimpleRouter()
router.register(r"users", UserViewSet, basename="users")

urlpatterns = [
    # ---------------- PUBLIC AUTH ----------------
    path("auth/register/", RegisterView.as_view(), name="register"),
    path("auth/login/", LoginView.as_view(), name="login"),
    # ---------------- AUTHENTICATED ----------------
    path("auth/me/", MeView.as_view(), name="me"),
    path("auth/change-password/", ChangePasswordView.as_view(), name="change-password"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    # ---------------- ADMIN ----------------
    path("", include(router.urls)),
]
