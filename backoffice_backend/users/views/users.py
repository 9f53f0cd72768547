# users/views/users.py

"""
ADMIN USER MANAGEMENT (users.manage)

GET    /api/users/                     ?role=&is_active=&search=
POST   /api/users/
GET    /api/users/<id>/
PATCH  /api/users/<id>/
DELETE /api/users/<id>/                (not your own account)
PATCH  /api/users/<id>/toggle-status/  (not your own account)
GET    /api/users/stats/
"""

import logging

from django.contrib.auth import get_user_model
from django.db.models import Count, Q
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from permissions.roles import CAP_USERS_MANAGE, HasCapability
from users.serializers import AdminUserSerializer, UserStatsSerializer

logger = logging.getLogger(__name__)

User = get_user_model()


class UserViewSet(viewsets.ModelViewSet):
    serializer_class = AdminUserSerializer
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_USERS_MANAGE
    filterset_fields = ["role", "is_active"]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def get_queryset(self):
        qs = User.objects.all().order_by("-created_at")
        search = (self.request.query_params.get("search") or "").strip()
        if search:
            qs = qs.filter(
                Q(email__icontains=search)
                | Q(username__icontains=search)
                | Q(first_name__icontains=search)
                | Q(last_name__icontains=search)
            )
        return qs

    def _is_self(self, user) -> bool:
        return user.pk == self.request.user.pk

    def destroy(self, request, *args, **kwargs):
        user = self.get_object()
        if self._is_self(user):
            return Response(
                {"detail": "Cannot delete your own account"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        user_id = str(user.pk)
        user.delete()
        logger.info("User deleted", extra={"user_id": user_id, "actor_id": str(request.user.pk)})
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        request=None,
        responses={200: AdminUserSerializer, 400: OpenApiResponse(description="Own account")},
    )
    @action(detail=True, methods=["patch"], url_path="toggle-status")
    def toggle_status(self, request, pk=None):
        user = self.get_object()
        if self._is_self(user):
            return Response(
                {"detail": "Cannot disable your own account"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        user.is_active = not user.is_active
        user.save(update_fields=["is_active", "updated_at"])

        logger.info(
            "User status toggled",
            extra={"user_id": str(user.pk), "is_active": user.is_active, "actor_id": str(request.user.pk)},
        )
        return Response(self.get_serializer(user).data)

    @extend_schema(responses={200: UserStatsSerializer})
    @action(detail=False, methods=["get"], url_path="stats")
    def stats(self, request):
        counts = User.objects.aggregate(
            total=Count("id"),
            active=Count("id", filter=Q(is_active=True)),
        )
        by_role = {role: 0 for role in User.Role.values}
        for row in User.objects.order_by().values("role").annotate(count=Count("id")):
            by_role[row["role"]] = row["count"]

        return Response(
            {
                "total": counts["total"],
                "active": counts["active"],
                "inactive": counts["total"] - counts["active"],
                "by_role": by_role,
            }
        )
