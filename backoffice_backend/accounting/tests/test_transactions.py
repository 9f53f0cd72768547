# accounting/tests/test_transactions.py

from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase
from rest_framework.test import APIClient

from accounting.models import Transaction
from accounting.services.exceptions import TransactionLockedError
from accounting.services.transaction_service import (
    delete_transaction,
    generate_reference,
    record_transaction,
    update_transaction,
)

User = get_user_model()


class TransactionServiceTests(TestCase):
    def setUp(self):
        self.admin = User.objects.create_user(email="admin@example.com", password="pass12345", role="admin")

    def test_reference_format(self):
        ref = generate_reference()
        prefix, millis, suffix = ref.split("-")
        self.assertEqual(prefix, "TXN")
        self.assertTrue(millis.isdigit())
        self.assertEqual(len(suffix), 8)
        self.assertEqual(suffix, suffix.upper())

    def test_record_defaults_to_completed(self):
        txn = record_transaction(
            type=Transaction.Type.EXPENSE,
            category=Transaction.Category.RENT,
            amount="1200.00",
            actor=self.admin,
        )
        self.assertEqual(txn.status, Transaction.Status.COMPLETED)
        self.assertEqual(txn.amount, Decimal("1200.00"))
        self.assertEqual(txn.created_by, self.admin)

    def test_pending_transaction_can_be_updated_and_deleted(self):
        txn = record_transaction(
            type=Transaction.Type.EXPENSE,
            category=Transaction.Category.UTILITY,
            amount="80.00",
            status=Transaction.Status.PENDING,
        )

        txn = update_transaction(txn=txn, changes={"amount": Decimal("95.00"), "reference": "HACK"})
        self.assertEqual(txn.amount, Decimal("95.00"))
        self.assertTrue(txn.reference.startswith("TXN-"))

        delete_transaction(txn=txn)
        self.assertFalse(Transaction.objects.filter(pk=txn.pk).exists())

    def test_completed_transaction_is_locked(self):
        txn = record_transaction(
            type=Transaction.Type.INCOME,
            category=Transaction.Category.OTHER,
            amount="10.00",
        )

        with self.assertRaises(TransactionLockedError):
            update_transaction(txn=txn, changes={"amount": Decimal("1.00")})

        with self.assertRaises(TransactionLockedError):
            delete_transaction(txn=txn)

        with self.assertRaises(ValidationError):
            txn.delete()

        txn.refresh_from_db()
        self.assertEqual(txn.amount, Decimal("10.00"))


class TransactionApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(email="admin@example.com", password="pass12345", role="admin")
        self.staff = User.objects.create_user(email="staff@example.com", password="pass12345", role="staff")
        self.customer = User.objects.create_user(email="buyer@example.com", password="pass12345")

    def _create(self, **overrides):
        payload = {
            "type": "expense",
            "category": "salary",
            "amount": "500.00",
            "description": "March salaries",
            "date": "2025-03-31",
        }
        payload.update(overrides)
        return self.client.post("/api/accounting/transactions/", payload, format="json")

    def test_staff_can_post_and_list(self):
        self.client.force_authenticate(self.staff)

        res = self._create()
        self.assertEqual(res.status_code, 201, res.data)
        self.assertTrue(res.data["reference"].startswith("TXN-"))
        self.assertEqual(res.data["created_by"], self.staff.id)

        res = self.client.get("/api/accounting/transactions/", {"category": "salary"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)

    def test_customer_is_forbidden(self):
        self.client.force_authenticate(self.customer)
        self.assertEqual(self.client.get("/api/accounting/transactions/").status_code, 403)
        self.assertEqual(self._create().status_code, 403)

    def test_completed_transaction_cannot_be_edited_or_deleted(self):
        self.client.force_authenticate(self.admin)
        txn_id = self._create().data["id"]

        res = self.client.patch(f"/api/accounting/transactions/{txn_id}/", {"amount": "1.00"}, format="json")
        self.assertEqual(res.status_code, 400)

        res = self.client.delete(f"/api/accounting/transactions/{txn_id}/")
        self.assertEqual(res.status_code, 400)
        self.assertTrue(Transaction.objects.filter(pk=txn_id).exists())

    def test_staff_cannot_delete(self):
        self.client.force_authenticate(self.staff)
        txn_id = self._create(status="pending").data["id"]

        res = self.client.delete(f"/api/accounting/transactions/{txn_id}/")
        self.assertEqual(res.status_code, 403)

        self.client.force_authenticate(self.admin)
        res = self.client.delete(f"/api/accounting/transactions/{txn_id}/")
        self.assertEqual(res.status_code, 204)

    def test_date_range_filter_and_summary(self):
        record_transaction(type="income", category="sale", amount="300.00", date=date(2025, 3, 1))
        record_transaction(type="expense", category="rent", amount="100.00", date=date(2025, 3, 2))
        record_transaction(type="income", category="sale", amount="999.00", date=date(2025, 4, 1))
        record_transaction(
            type="income", category="other", amount="50.00", date=date(2025, 3, 3), status="pending"
        )

        self.client.force_authenticate(self.staff)

        res = self.client.get(
            "/api/accounting/transactions/summary/",
            {"date_from": "2025-03-01", "date_to": "2025-03-31"},
        )
        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(Decimal(res.data["income"]), Decimal("300.00"))
        self.assertEqual(Decimal(res.data["expense"]), Decimal("100.00"))
        self.assertEqual(Decimal(res.data["profit"]), Decimal("200.00"))
        self.assertEqual(res.data["count"], 2)

    def test_bad_date_filter_is_400(self):
        self.client.force_authenticate(self.staff)
        res = self.client.get("/api/accounting/transactions/", {"date_from": "yesterday"})
        self.assertEqual(res.status_code, 400)
