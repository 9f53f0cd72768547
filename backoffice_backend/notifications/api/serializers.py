# notifications/api/serializers.py

from django.contrib.auth import get_user_model
from rest_framework import serializers

from notifications.models import Notification

User = get_user_model()


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = [
            "id",
            "recipient",
            "title",
            "message",
            "type",
            "priority",
            "is_read",
            "read_at",
            "data",
            "related_entity_type",
            "related_entity_id",
            "action_url",
            "created_at",
        ]
        read_only_fields = fields


class NotificationCreateSerializer(serializers.Serializer):
    """Staff-authored notification (POST /notifications/)."""

    recipient = serializers.PrimaryKeyRelatedField(queryset=User.objects.filter(is_active=True))
    title = serializers.CharField(max_length=255)
    message = serializers.CharField()
    type = serializers.ChoiceField(choices=Notification.Type.choices, default=Notification.Type.SYSTEM)
    priority = serializers.ChoiceField(
        choices=Notification.Priority.choices, default=Notification.Priority.MEDIUM
    )
    related_entity_type = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    related_entity_id = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    data = serializers.JSONField(required=False, default=dict)
    action_url = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
