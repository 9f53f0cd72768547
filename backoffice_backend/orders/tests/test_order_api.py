# orders/tests/test_order_api.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from orders.models import Order
from orders.services.order_service import create_order
from products.models import Product

User = get_user_model()


class OrderApiTests(TestCase):
    """
    GUARANTEES:
    - customers only see and create their own orders
    - status changes need orders.manage
    - discard needs orders.discard (admin)
    - stock errors map to 409, unknown products to 404
    """

    def setUp(self):
        self.client = APIClient()

        self.admin = User.objects.create_user(email="admin@example.com", password="pass12345", role="admin")
        self.staff = User.objects.create_user(email="staff@example.com", password="pass12345", role="staff")
        self.alice = User.objects.create_user(email="alice@example.com", password="pass12345")
        self.bob = User.objects.create_user(email="bob@example.com", password="pass12345")

        self.product = Product.objects.create(
            name="Coffee Beans", sku="COF-1", unit_price=Decimal("9.00"), quantity=5, low_stock_quantity=1
        )

    def _create(self, quantity=1, **extra):
        payload = {"items": [{"product": str(self.product.pk), "quantity": quantity}], **extra}
        return self.client.post("/api/orders/", payload, format="json")

    def test_customer_creates_order_for_themselves(self):
        self.client.force_authenticate(self.alice)

        res = self._create(quantity=2, customer=str(self.bob.pk), payment_method="online")

        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["customer"], self.alice.pk)
        self.assertEqual(res.data["status"], "pending")
        self.assertEqual(Decimal(res.data["total_amount"]), Decimal("18.00"))
        self.assertEqual(len(res.data["items"]), 1)

        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 3)

    def test_staff_can_order_for_a_customer(self):
        self.client.force_authenticate(self.staff)

        res = self._create(customer=str(self.bob.pk))
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["customer"], self.bob.pk)

    def test_insufficient_stock_is_409(self):
        self.client.force_authenticate(self.alice)

        res = self._create(quantity=6)
        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.data["item"], 0)
        self.assertEqual(Order.objects.count(), 0)

    def test_unknown_product_is_404_and_empty_items_400(self):
        self.client.force_authenticate(self.alice)

        res = self.client.post(
            "/api/orders/",
            {"items": [{"product": "5b4c1f0e-8a43-4c3e-9b0b-000000000000", "quantity": 1}]},
            format="json",
        )
        self.assertEqual(res.status_code, 404)

        res = self.client.post("/api/orders/", {"items": []}, format="json")
        self.assertEqual(res.status_code, 400)

    def test_anonymous_cannot_order(self):
        self.assertEqual(self._create().status_code, 401)

    def test_listing_is_scoped_to_the_customer(self):
        create_order(items=[{"product": str(self.product.pk), "quantity": 1}], actor=self.alice)
        create_order(items=[{"product": str(self.product.pk), "quantity": 1}], actor=self.bob)

        self.client.force_authenticate(self.alice)
        res = self.client.get("/api/orders/")
        self.assertEqual(res.data["count"], 1)

        bob_order = Order.objects.get(customer=self.bob)
        self.assertEqual(self.client.get(f"/api/orders/{bob_order.pk}/").status_code, 404)

        self.client.force_authenticate(self.staff)
        res = self.client.get("/api/orders/", {"status": "pending"})
        self.assertEqual(res.data["count"], 2)

    def test_status_change_requires_manage(self):
        order = create_order(items=[{"product": str(self.product.pk), "quantity": 1}], actor=self.alice)
        url = f"/api/orders/{order.pk}/status/"

        self.client.force_authenticate(self.alice)
        self.assertEqual(self.client.patch(url, {"status": "cancelled"}, format="json").status_code, 403)

        self.client.force_authenticate(self.staff)
        res = self.client.patch(url, {"status": "shipped", "tracking_number": "TRK-1"}, format="json")
        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["status"], "shipped")
        self.assertEqual(res.data["tracking_number"], "TRK-1")

        res = self.client.patch(url, {"status": "pending"}, format="json")
        self.assertEqual(res.status_code, 400)

    def test_discard_is_admin_only(self):
        order = create_order(items=[{"product": str(self.product.pk), "quantity": 2}], actor=self.alice)
        url = f"/api/orders/{order.pk}/"

        self.client.force_authenticate(self.staff)
        self.assertEqual(self.client.delete(url).status_code, 403)

        self.client.force_authenticate(self.admin)
        self.assertEqual(self.client.delete(url).status_code, 204)

        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 5)

    def test_stats(self):
        create_order(items=[{"product": str(self.product.pk), "quantity": 1}], actor=self.alice)

        self.client.force_authenticate(self.alice)
        self.assertEqual(self.client.get("/api/orders/stats/").status_code, 403)

        self.client.force_authenticate(self.staff)
        res = self.client.get("/api/orders/stats/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["total"], 1)
        self.assertEqual(res.data["by_status"]["pending"]["count"], 1)
