from django.contrib import admin

from notifications.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("title", "recipient", "type", "priority", "is_read", "created_at")
    list_filter = ("type", "priority", "is_read")
    search_fields = ("title", "message", "recipient__email")
    ordering = ("-created_at",)
