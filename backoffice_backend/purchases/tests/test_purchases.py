# purchases/tests/test_purchases.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase
from rest_framework.test import APIClient

from accounting.models import Transaction
from products.models import InventoryMovement, Product
from purchases.models import Supplier, SupplierPurchase
from purchases.services.exceptions import InvalidPurchase
from purchases.services.purchase_service import record_purchase

User = get_user_model()


class PurchaseServiceTests(TestCase):
    def setUp(self):
        self.staff = User.objects.create_user(email="staff@example.com", password="pass12345", role="staff")
        self.supplier = Supplier.objects.create(name="Acme Wholesale", phone="+100200300")
        self.product = Product.objects.create(
            name="Flour 2kg", sku="FL-2", unit_price=Decimal("3.20"), quantity=4, low_stock_quantity=5
        )

    def test_history_only_by_default(self):
        purchase = record_purchase(
            supplier=self.supplier,
            product_id=self.product.pk,
            quantity=10,
            unit_price="1.75",
            invoice_number="INV-77",
            actor=self.staff,
        )

        self.assertEqual(purchase.total_amount, Decimal("17.50"))
        self.assertEqual(purchase.product_name, "Flour 2kg")

        self.supplier.refresh_from_db()
        self.assertEqual(self.supplier.total_purchase_amount, Decimal("17.50"))
        self.assertIsNotNone(self.supplier.last_purchase_date)

        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 4)
        self.assertEqual(InventoryMovement.objects.count(), 0)
        self.assertEqual(Transaction.objects.count(), 0)

    def test_receive_into_stock_goes_through_the_gateway(self):
        record_purchase(
            supplier=self.supplier,
            product_id=self.product.pk,
            quantity=10,
            unit_price="1.75",
            invoice_number="INV-78",
            receive_into_stock=True,
            record_expense=True,
            actor=self.staff,
        )

        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 14)
        self.assertEqual(self.product.stock_status, "in_stock")

        movement = InventoryMovement.objects.get(product=self.product)
        self.assertEqual(movement.movement_type, "in")
        self.assertEqual(movement.reference, "INV-78")
        self.assertEqual(movement.new_quantity - movement.previous_quantity, 10)

        expense = Transaction.objects.get()
        self.assertEqual(expense.type, "expense")
        self.assertEqual(expense.category, "purchase")
        self.assertEqual(expense.amount, Decimal("17.50"))

    def test_totals_accumulate(self):
        record_purchase(supplier=self.supplier, product_id=self.product.pk, quantity=1, unit_price="2.00")
        record_purchase(supplier=self.supplier, product_id=self.product.pk, quantity=3, unit_price="1.00")

        self.supplier.refresh_from_db()
        self.assertEqual(self.supplier.total_purchase_amount, Decimal("5.00"))
        self.assertEqual(self.supplier.purchases.count(), 2)

    def test_invalid_quantity(self):
        with self.assertRaises(InvalidPurchase):
            record_purchase(supplier=self.supplier, product_id=self.product.pk, quantity=0, unit_price="1.00")

    def test_history_rows_are_immutable(self):
        purchase = record_purchase(
            supplier=self.supplier, product_id=self.product.pk, quantity=1, unit_price="1.00"
        )

        with self.assertRaises(ValidationError):
            purchase.save()
        with self.assertRaises(ValidationError):
            purchase.delete()


class SupplierApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(email="admin@example.com", password="pass12345", role="admin")
        self.staff = User.objects.create_user(email="staff@example.com", password="pass12345", role="staff")
        self.customer = User.objects.create_user(email="buyer@example.com", password="pass12345")
        self.product = Product.objects.create(
            name="Sugar 1kg", sku="SU-1", unit_price=Decimal("1.10"), quantity=0, low_stock_quantity=2
        )

    def test_staff_manages_suppliers(self):
        self.client.force_authenticate(self.staff)

        res = self.client.post(
            "/api/purchases/suppliers/",
            {"name": "Sweet Co", "phone": "555-0101", "email": "Sales@Sweet.Example", "company": "Sweet Co Ltd"},
            format="json",
        )
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["email"], "sales@sweet.example")
        supplier_id = res.data["id"]

        res = self.client.get("/api/purchases/suppliers/", {"search": "sweet"})
        self.assertEqual(res.data["count"], 1)

        res = self.client.post(
            f"/api/purchases/suppliers/{supplier_id}/purchases/",
            {
                "product_id": str(self.product.pk),
                "quantity": 6,
                "unit_price": "0.80",
                "receive_into_stock": True,
            },
            format="json",
        )
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(Decimal(res.data["total_amount"]), Decimal("4.80"))

        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 6)

        res = self.client.get(f"/api/purchases/suppliers/{supplier_id}/purchases/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)

        self.assertEqual(self.client.delete(f"/api/purchases/suppliers/{supplier_id}/").status_code, 403)

        self.client.force_authenticate(self.admin)
        self.assertEqual(self.client.delete(f"/api/purchases/suppliers/{supplier_id}/").status_code, 204)
        self.assertEqual(SupplierPurchase.objects.count(), 0)

    def test_unknown_product_is_404(self):
        supplier = Supplier.objects.create(name="Acme", phone="1")
        self.client.force_authenticate(self.staff)

        res = self.client.post(
            f"/api/purchases/suppliers/{supplier.pk}/purchases/",
            {"product_id": "5b4c1f0e-8a43-4c3e-9b0b-000000000000", "quantity": 1, "unit_price": "1.00"},
            format="json",
        )
        self.assertEqual(res.status_code, 404)

    def test_customer_is_forbidden(self):
        self.client.force_authenticate(self.customer)
        self.assertEqual(self.client.get("/api/purchases/suppliers/").status_code, 403)
