# accounting/admin.py

from django.contrib import admin

from accounting.models import Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = (
        "reference",
        "date",
        "type",
        "category",
        "amount",
        "status",
        "payment_method",
        "related_entity_type",
        "related_entity_id",
    )
    list_filter = ("type", "category", "status", "payment_method")
    search_fields = ("reference", "description", "related_entity_id")
    readonly_fields = ("reference", "created_by", "created_at", "updated_at")
    date_hierarchy = "date"
    ordering = ("-date", "-created_at")

    def has_delete_permission(self, request, obj=None):
        if obj is not None and obj.status == Transaction.Status.COMPLETED:
            return False
        return super().has_delete_permission(request, obj)
