# accounting/api/serializers/transaction.py

from rest_framework import serializers

from accounting.models import Transaction


class TransactionSerializer(serializers.ModelSerializer):
    created_by_email = serializers.EmailField(source="created_by.email", read_only=True, default=None)

    class Meta:
        model = Transaction
        fields = [
            "id",
            "reference",
            "type",
            "category",
            "amount",
            "status",
            "description",
            "date",
            "payment_method",
            "related_entity_type",
            "related_entity_id",
            "created_by",
            "created_by_email",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "reference",
            "created_by",
            "created_by_email",
            "created_at",
            "updated_at",
        ]

    def validate_amount(self, value):
        if value is None or value < 0:
            raise serializers.ValidationError("Amount must be non-negative")
        return value


class TransactionSummarySerializer(serializers.Serializer):
    income = serializers.DecimalField(max_digits=16, decimal_places=2)
    expense = serializers.DecimalField(max_digits=16, decimal_places=2)
    profit = serializers.DecimalField(max_digits=16, decimal_places=2)
    profit_margin = serializers.DecimalField(max_digits=16, decimal_places=2)
    count = serializers.IntegerField()
