# products/tests/test_api.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from products.models import Category, InventoryMovement, Product, Seller

User = get_user_model()


class ProductApiTests(TestCase):
    """
    Catalog + inventory HTTP tests.

    GUARANTEES:
    - stock only moves through POST <id>/stock/
    - quantity is read-only on update
    - insufficient stock maps to 409
    - customers cannot adjust stock or edit the catalog
    - the public list hides unpublished products
    """

    def setUp(self):
        self.client = APIClient()

        self.staff = User.objects.create_user(email="staff@example.com", password="pass12345", role="staff")
        self.admin = User.objects.create_user(email="admin@example.com", password="pass12345", role="admin")
        self.customer = User.objects.create_user(email="buyer@example.com", password="pass12345")

        self.category = Category.objects.create(name="Beverages")

        self.product = Product.objects.create(
            name="Orange Juice",
            sku="OJ-1",
            unit_price=Decimal("2.50"),
            quantity=10,
            low_stock_quantity=3,
            category=self.category,
        )

    def _url(self, suffix=""):
        return f"/api/products/products/{suffix}"

    def test_create_with_opening_quantity_records_movement(self):
        self.client.force_authenticate(self.staff)

        res = self.client.post(
            self._url(),
            {
                "name": "Apple Juice",
                "sku": "aj-1",
                "unit_price": "3.00",
                "low_stock_quantity": 2,
                "opening_quantity": 12,
                "category": str(self.category.id),
            },
            format="json",
        )

        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["sku"], "AJ-1")
        self.assertEqual(res.data["quantity"], 12)
        self.assertEqual(res.data["stock_status"], "in_stock")

        movement = InventoryMovement.objects.get(product_id=res.data["id"])
        self.assertEqual(movement.reason, "Opening stock")
        self.assertEqual(movement.previous_quantity, 0)
        self.assertEqual(movement.new_quantity, 12)

    def test_quantity_is_read_only_on_update(self):
        self.client.force_authenticate(self.staff)

        res = self.client.patch(
            self._url(f"{self.product.id}/"),
            {"quantity": 999, "name": "Orange Juice 1L"},
            format="json",
        )

        self.assertEqual(res.status_code, 200, res.data)
        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 10)
        self.assertEqual(self.product.name, "Orange Juice 1L")

    def test_stock_endpoint_applies_change(self):
        self.client.force_authenticate(self.staff)

        res = self.client.post(
            self._url(f"{self.product.id}/stock/"),
            {"change": -8, "type": "out", "reason": "Damaged in transit"},
            format="json",
        )

        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["product"]["quantity"], 2)
        self.assertEqual(res.data["product"]["stock_status"], "low_stock")
        self.assertEqual(res.data["movement"]["reason"], "Damaged in transit")

    def test_stock_endpoint_insufficient_is_conflict(self):
        self.client.force_authenticate(self.staff)

        res = self.client.post(self._url(f"{self.product.id}/stock/"), {"change": -11}, format="json")

        self.assertEqual(res.status_code, 409)
        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity, 10)

    def test_stock_endpoint_rejects_zero_change(self):
        self.client.force_authenticate(self.staff)

        res = self.client.post(self._url(f"{self.product.id}/stock/"), {"change": 0}, format="json")
        self.assertEqual(res.status_code, 400)

    def test_customer_cannot_adjust_stock(self):
        self.client.force_authenticate(self.customer)

        res = self.client.post(self._url(f"{self.product.id}/stock/"), {"change": 5}, format="json")
        self.assertEqual(res.status_code, 403)

    def test_anonymous_cannot_create_product(self):
        res = self.client.post(
            self._url(), {"name": "X", "sku": "X-1", "unit_price": "1.00"}, format="json"
        )
        self.assertEqual(res.status_code, 401)

    def test_public_list_hides_unpublished(self):
        Product.objects.create(name="Draft Item", sku="DRAFT-1", unit_price=Decimal("1.00"), publish=False)

        res = self.client.get(self._url())
        self.assertEqual(res.status_code, 200)
        skus = {row["sku"] for row in res.data["results"]}
        self.assertIn("OJ-1", skus)
        self.assertNotIn("DRAFT-1", skus)

    def test_list_filters(self):
        Product.objects.create(name="Cola", sku="COLA-1", unit_price=Decimal("9.00"))

        res = self.client.get(self._url(), {"min_price": "5", "q": "col"})
        self.assertEqual([row["sku"] for row in res.data["results"]], ["COLA-1"])

        res = self.client.get(self._url(), {"category": str(self.category.id)})
        self.assertEqual([row["sku"] for row in res.data["results"]], ["OJ-1"])

    def test_barcode_and_slug_lookup(self):
        res = self.client.get(self._url(f"barcode/{self.product.barcode}/"))
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["id"], str(self.product.id))

        res = self.client.get(self._url(f"slug/{self.product.slug}/"))
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["sku"], "OJ-1")

    def test_low_stock_and_movements_endpoints(self):
        self.client.force_authenticate(self.staff)
        self.client.post(self._url(f"{self.product.id}/stock/"), {"change": -9}, format="json")

        res = self.client.get(self._url("low-stock/"))
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)
        self.assertEqual(res.data["results"][0]["sku"], "OJ-1")

        res = self.client.get(self._url(f"{self.product.id}/movements/"))
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)
        self.assertEqual(res.data["results"][0]["movement_type"], "out")

        res = self.client.get(self._url(f"{self.product.id}/stock-level/"))
        self.assertEqual(res.data["quantity"], 1)
        self.assertEqual(res.data["stock_status"], "low_stock")

    def test_delete_is_soft_by_default(self):
        self.client.force_authenticate(self.admin)

        res = self.client.delete(self._url(f"{self.product.id}/"))
        self.assertEqual(res.status_code, 200)

        self.product.refresh_from_db()
        self.assertFalse(self.product.publish)

    @override_settings(PRODUCT_DELETE_MODE="hard")
    def test_delete_is_hard_when_configured(self):
        self.client.force_authenticate(self.admin)

        res = self.client.delete(self._url(f"{self.product.id}/"))
        self.assertEqual(res.status_code, 204)
        self.assertFalse(Product.objects.filter(pk=self.product.pk).exists())

    def test_staff_cannot_delete_product(self):
        self.client.force_authenticate(self.staff)

        res = self.client.delete(self._url(f"{self.product.id}/"))
        self.assertEqual(res.status_code, 403)


class SellerApiTests(TestCase):
    """
    Seller HTTP tests.

    GUARANTEES:
    - list / retrieve are public
    - staff create and update, only admin deletes
    - slug follows the name; slug and email stay unique
    - deleting a seller keeps its products
    """

    def setUp(self):
        self.client = APIClient()

        self.staff = User.objects.create_user(email="staff@example.com", password="pass12345", role="staff")
        self.admin = User.objects.create_user(email="admin@example.com", password="pass12345", role="admin")
        self.customer = User.objects.create_user(email="buyer@example.com", password="pass12345")

        self.seller = Seller.objects.create(name="Green Farms", email="hello@greenfarms.test")
        Seller.objects.create(name="Old Mill", status=Seller.Status.INACTIVE)

    def _url(self, suffix=""):
        return f"/api/products/sellers/{suffix}"

    def test_public_list_with_status_and_search(self):
        res = self.client.get(self._url())
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 2)

        res = self.client.get(self._url(), {"status": "active"})
        self.assertEqual([s["name"] for s in res.data["results"]], ["Green Farms"])

        res = self.client.get(self._url(), {"search": "greenfarms"})
        self.assertEqual([s["name"] for s in res.data["results"]], ["Green Farms"])

        res = self.client.get(self._url(f"{self.seller.id}/"))
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["slug"], "green-farms")

    def test_staff_creates_seller_with_generated_slug(self):
        self.client.force_authenticate(self.staff)

        res = self.client.post(
            self._url(),
            {"name": "Blue Coast Fish", "email": "Sales@BlueCoast.test", "rating": "4.50"},
            format="json",
        )

        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["slug"], "blue-coast-fish")
        self.assertEqual(res.data["email"], "sales@bluecoast.test")
        self.assertEqual(res.data["status"], "active")

    def test_duplicate_slug_and_email_are_rejected(self):
        self.client.force_authenticate(self.staff)

        res = self.client.post(self._url(), {"name": "Green Farms"}, format="json")
        self.assertEqual(res.status_code, 400)

        res = self.client.post(
            self._url(), {"name": "Other", "email": "hello@greenfarms.test"}, format="json"
        )
        self.assertEqual(res.status_code, 400)
        self.assertIn("email", res.data)

    def test_sellers_without_email_do_not_collide(self):
        self.client.force_authenticate(self.staff)

        first = self.client.post(self._url(), {"name": "North Bakery"}, format="json")
        second = self.client.post(self._url(), {"name": "South Bakery", "email": ""}, format="json")

        self.assertEqual(first.status_code, 201, first.data)
        self.assertEqual(second.status_code, 201, second.data)
        self.assertIsNone(second.data["email"])

    def test_rename_refreshes_slug(self):
        self.client.force_authenticate(self.staff)

        res = self.client.patch(self._url(f"{self.seller.id}/"), {"name": "Green Valley"}, format="json")

        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["slug"], "green-valley")

    def test_rating_is_bounded(self):
        self.client.force_authenticate(self.staff)

        res = self.client.patch(self._url(f"{self.seller.id}/"), {"rating": "5.50"}, format="json")
        self.assertEqual(res.status_code, 400)

    def test_customer_cannot_create_and_staff_cannot_delete(self):
        self.client.force_authenticate(self.customer)
        res = self.client.post(self._url(), {"name": "Nope"}, format="json")
        self.assertEqual(res.status_code, 403)

        self.client.force_authenticate(self.staff)
        res = self.client.delete(self._url(f"{self.seller.id}/"))
        self.assertEqual(res.status_code, 403)

    def test_admin_delete_keeps_products(self):
        product = Product.objects.create(
            name="Farm Eggs",
            sku="EGG-12",
            unit_price=Decimal("3.20"),
            seller=self.seller,
        )
        self.client.force_authenticate(self.admin)

        res = self.client.delete(self._url(f"{self.seller.id}/"))

        self.assertEqual(res.status_code, 204)
        product.refresh_from_db()
        self.assertIsNone(product.seller)

    def test_product_filter_by_seller(self):
        Product.objects.create(
            name="Farm Eggs", sku="EGG-12", unit_price=Decimal("3.20"), seller=self.seller
        )
        Product.objects.create(name="Tap Water", sku="H2O", unit_price=Decimal("0.50"))

        res = self.client.get("/api/products/products/", {"seller": str(self.seller.id)})

        self.assertEqual(res.status_code, 200)
        self.assertEqual([p["name"] for p in res.data["results"]], ["Farm Eggs"])
        self.assertEqual(res.data["results"][0]["seller_name"], "Green Farms")
