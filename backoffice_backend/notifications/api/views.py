# notifications/api/views.py

"""
NOTIFICATION INBOX API

- Every user only ever sees their own notifications.
- Creating a notification for someone else needs notifications.send.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from notifications.api.serializers import NotificationCreateSerializer, NotificationSerializer
from notifications.models import Notification
from notifications.services.notification_service import (
    create_notification,
    mark_all_read,
    unread_count,
)
from permissions.roles import CAP_NOTIFICATIONS_SEND, HasCapability


class NotificationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]
    required_capability = CAP_NOTIFICATIONS_SEND

    def get_permissions(self):
        if self.action == "create":
            return [IsAuthenticated(), HasCapability()]
        return [IsAuthenticated()]

    def get_queryset(self):
        qs = Notification.objects.filter(recipient=self.request.user).order_by("-created_at")

        is_read = (self.request.query_params.get("is_read") or "").strip().lower()
        if is_read in ("true", "1", "yes"):
            qs = qs.filter(is_read=True)
        elif is_read in ("false", "0", "no"):
            qs = qs.filter(is_read=False)

        ntype = (self.request.query_params.get("type") or "").strip()
        if ntype:
            qs = qs.filter(type=ntype)

        return qs

    def list(self, request, *args, **kwargs):
        response = super().list(request, *args, **kwargs)
        response.data["unread_count"] = unread_count(request.user)
        return response

    @extend_schema(request=NotificationCreateSerializer, responses={201: NotificationSerializer})
    def create(self, request, *args, **kwargs):
        payload = NotificationCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        notification = create_notification(**payload.validated_data)
        return Response(NotificationSerializer(notification).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: NotificationSerializer})
    @action(detail=True, methods=["patch", "post"], url_path="read")
    def read(self, request, pk=None):
        notification = self.get_object()
        notification.mark_read()
        return Response(NotificationSerializer(notification).data)

    @extend_schema(request=None, responses={200: dict})
    @action(detail=False, methods=["patch", "post"], url_path="read-all")
    def read_all(self, request):
        updated = mark_all_read(request.user)
        return Response({"updated": updated, "unread_count": 0})

    @extend_schema(responses={200: dict})
    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread(self, request):
        return Response({"unread_count": unread_count(request.user)})
