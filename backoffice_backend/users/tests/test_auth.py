# users/tests/test_auth.py

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from permissions.roles import (
    CAP_CATALOG_DELETE,
    CAP_INVENTORY_ADJUST,
    CAP_ORDERS_CREATE,
    user_has_capability,
)

User = get_user_model()


class AuthApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_register_always_creates_a_customer(self):
        res = self.client.post(
            "/api/auth/register/",
            {
                "email": "New.User@Example.com",
                "password": "s3cret-pass",
                "first_name": "New",
                "role": "admin",
            },
            format="json",
        )

        self.assertEqual(res.status_code, 201, res.data)
        self.assertIn("access", res.data)
        self.assertIn("refresh", res.data)
        self.assertEqual(res.data["user"]["role"], "customer")
        self.assertEqual(res.data["user"]["email"], "new.user@example.com")
        self.assertEqual(res.data["user"]["username"], "new.user")

    def test_register_rejects_duplicate_email(self):
        User.objects.create_user(email="taken@example.com", password="pass12345")

        res = self.client.post(
            "/api/auth/register/",
            {"email": "TAKEN@example.com", "password": "pass12345"},
            format="json",
        )
        self.assertEqual(res.status_code, 400)

    def test_login_with_email_or_username(self):
        User.objects.create_user(email="clerk@example.com", username="clerk", password="pass12345", role="staff")

        res = self.client.post(
            "/api/auth/login/", {"identifier": "clerk@example.com", "password": "pass12345"}, format="json"
        )
        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["user"]["role"], "staff")

        res = self.client.post("/api/auth/login/", {"identifier": "clerk", "password": "pass12345"}, format="json")
        self.assertEqual(res.status_code, 200, res.data)

        res = self.client.post("/api/auth/login/", {"identifier": "clerk", "password": "wrong"}, format="json")
        self.assertEqual(res.status_code, 401)

    def test_me_with_bearer_token(self):
        User.objects.create_user(email="me@example.com", password="pass12345")
        login = self.client.post(
            "/api/auth/login/", {"identifier": "me@example.com", "password": "pass12345"}, format="json"
        )

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")
        res = self.client.get("/api/auth/me/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["email"], "me@example.com")

    def test_me_requires_authentication(self):
        self.assertEqual(self.client.get("/api/auth/me/").status_code, 401)


class RoleCapabilityTests(TestCase):
    def test_role_matrix(self):
        admin = User.objects.create_user(email="a@example.com", password="x1234567", role="admin")
        staff = User.objects.create_user(email="s@example.com", password="x1234567", role="staff")
        customer = User.objects.create_user(email="c@example.com", password="x1234567")

        self.assertTrue(admin.is_staff)
        self.assertTrue(staff.is_staff)
        self.assertFalse(customer.is_staff)

        self.assertTrue(user_has_capability(admin, CAP_CATALOG_DELETE))
        self.assertFalse(user_has_capability(staff, CAP_CATALOG_DELETE))
        self.assertTrue(user_has_capability(staff, CAP_INVENTORY_ADJUST))
        self.assertFalse(user_has_capability(customer, CAP_INVENTORY_ADJUST))
        self.assertTrue(user_has_capability(customer, CAP_ORDERS_CREATE))
