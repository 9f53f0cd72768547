from .auth import LoginView, LogoutView, RegisterView
from .me import ChangePasswordView, MeView
from .users import UserViewSet

__all__ = [
    "RegisterView",
    "LoginView",
    "LogoutView",
    "MeView",
    "ChangePasswordView",
    "UserViewSet",
]
