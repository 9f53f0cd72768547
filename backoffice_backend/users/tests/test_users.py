# users/tests/test_users.py

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from permissions.roles import CAP_USERS_MANAGE, user_has_capability

User = get_user_model()


def _login(client, identifier, password="pass12345"):
    return client.post(
        "/api/auth/login/", {"identifier": identifier, "password": password}, format="json"
    )


class SelfServiceApiTests(TestCase):
    """
    GUARANTEES:
    - users edit their own contact details, not their role or email
    - password change requires the current password
    - logout blacklists the refresh token
    """

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            email="jane@example.com", username="jane", password="pass12345"
        )

    def test_profile_update(self):
        self.client.force_authenticate(self.user)

        res = self.client.patch(
            "/api/auth/me/",
            {"first_name": "Jane", "phone": "+15550100", "role": "admin", "email": "x@example.com"},
            format="json",
        )

        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["first_name"], "Jane")
        self.assertEqual(res.data["phone"], "+15550100")

        self.user.refresh_from_db()
        self.assertEqual(self.user.role, "customer")
        self.assertEqual(self.user.email, "jane@example.com")

    def test_profile_username_must_be_free(self):
        User.objects.create_user(email="other@example.com", username="taken", password="pass12345")
        self.client.force_authenticate(self.user)

        res = self.client.patch("/api/auth/me/", {"username": "TAKEN"}, format="json")
        self.assertEqual(res.status_code, 400)

    def test_change_password(self):
        self.client.force_authenticate(self.user)

        res = self.client.post(
            "/api/auth/change-password/",
            {"current_password": "pass12345", "new_password": "n3w-secret-pass"},
            format="json",
        )

        self.assertEqual(res.status_code, 200, res.data)
        self.client.force_authenticate(None)
        self.assertEqual(_login(self.client, "jane", "pass12345").status_code, 401)
        self.assertEqual(_login(self.client, "jane", "n3w-secret-pass").status_code, 200)

    def test_change_password_rejects_wrong_current_password(self):
        self.client.force_authenticate(self.user)

        res = self.client.post(
            "/api/auth/change-password/",
            {"current_password": "nope", "new_password": "n3w-secret-pass"},
            format="json",
        )

        self.assertEqual(res.status_code, 400)
        self.assertIn("current_password", res.data)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("pass12345"))

    def test_logout_blacklists_refresh_token(self):
        tokens = _login(self.client, "jane").data
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        res = self.client.post("/api/auth/logout/", {"refresh": tokens["refresh"]}, format="json")
        self.assertEqual(res.status_code, 200, res.data)

        self.client.credentials()
        res = self.client.post("/api/auth/jwt/refresh/", {"refresh": tokens["refresh"]}, format="json")
        self.assertEqual(res.status_code, 401)

    def test_logout_rejects_invalid_or_foreign_token(self):
        User.objects.create_user(email="bob@example.com", username="bob", password="pass12345")
        foreign = _login(self.client, "bob").data["refresh"]

        self.client.force_authenticate(self.user)

        res = self.client.post("/api/auth/logout/", {"refresh": "not-a-token"}, format="json")
        self.assertEqual(res.status_code, 400)

        res = self.client.post("/api/auth/logout/", {"refresh": foreign}, format="json")
        self.assertEqual(res.status_code, 400)


class UserManagementApiTests(TestCase):
    """
    GUARANTEES:
    - only admins (users.manage) reach /api/users/
    - admins cannot delete, disable or demote themselves
    - deactivated accounts cannot log in
    - role changes keep is_staff in sync
    """

    def setUp(self):
        self.client = APIClient()

        self.admin = User.objects.create_user(email="admin@example.com", password="pass12345", role="admin")
        self.staff = User.objects.create_user(email="staff@example.com", password="pass12345", role="staff")
        self.customer = User.objects.create_user(
            email="buyer@example.com", username="buyer", password="pass12345"
        )

        self.client.force_authenticate(self.admin)

    def test_only_admin_has_user_management(self):
        self.assertTrue(user_has_capability(self.admin, CAP_USERS_MANAGE))
        self.assertFalse(user_has_capability(self.staff, CAP_USERS_MANAGE))

        self.client.force_authenticate(self.staff)
        self.assertEqual(self.client.get("/api/users/").status_code, 403)

        self.client.force_authenticate(self.customer)
        self.assertEqual(self.client.get("/api/users/").status_code, 403)

    def test_list_filters_and_search(self):
        res = self.client.get("/api/users/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 3)

        res = self.client.get("/api/users/", {"role": "staff"})
        self.assertEqual([u["email"] for u in res.data["results"]], ["staff@example.com"])

        res = self.client.get("/api/users/", {"search": "buyer"})
        self.assertEqual([u["email"] for u in res.data["results"]], ["buyer@example.com"])
        self.assertNotIn("password", res.data["results"][0])

    def test_admin_creates_staff_account(self):
        res = self.client.post(
            "/api/users/",
            {"email": "New.Clerk@Example.com", "password": "clerk-pass-1", "role": "staff"},
            format="json",
        )

        self.assertEqual(res.status_code, 201, res.data)
        clerk = User.objects.get(email="new.clerk@example.com")
        self.assertEqual(clerk.role, "staff")
        self.assertTrue(clerk.is_staff)
        self.assertTrue(clerk.check_password("clerk-pass-1"))

    def test_role_change_syncs_is_staff(self):
        res = self.client.patch(f"/api/users/{self.staff.id}/", {"role": "customer"}, format="json")

        self.assertEqual(res.status_code, 200, res.data)
        self.staff.refresh_from_db()
        self.assertEqual(self.staff.role, "customer")
        self.assertFalse(self.staff.is_staff)

    def test_admin_cannot_demote_self(self):
        res = self.client.patch(f"/api/users/{self.admin.id}/", {"role": "staff"}, format="json")
        self.assertEqual(res.status_code, 400)

        self.admin.refresh_from_db()
        self.assertEqual(self.admin.role, "admin")

    def test_toggle_status_blocks_login(self):
        res = self.client.patch(f"/api/users/{self.customer.id}/toggle-status/")
        self.assertEqual(res.status_code, 200, res.data)
        self.assertFalse(res.data["is_active"])

        anon = APIClient()
        self.assertEqual(_login(anon, "buyer").status_code, 401)

        res = self.client.patch(f"/api/users/{self.customer.id}/toggle-status/")
        self.assertTrue(res.data["is_active"])
        self.assertEqual(_login(anon, "buyer").status_code, 200)

    def test_cannot_toggle_or_delete_self(self):
        res = self.client.patch(f"/api/users/{self.admin.id}/toggle-status/")
        self.assertEqual(res.status_code, 400)

        res = self.client.delete(f"/api/users/{self.admin.id}/")
        self.assertEqual(res.status_code, 400)
        self.assertTrue(User.objects.filter(pk=self.admin.pk).exists())

    def test_delete_user(self):
        res = self.client.delete(f"/api/users/{self.customer.id}/")

        self.assertEqual(res.status_code, 204)
        self.assertFalse(User.objects.filter(pk=self.customer.pk).exists())

    def test_stats(self):
        self.customer.is_active = False
        self.customer.save(update_fields=["is_active"])

        res = self.client.get("/api/users/stats/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["total"], 3)
        self.assertEqual(res.data["active"], 2)
        self.assertEqual(res.data["inactive"], 1)
        self.assertEqual(res.data["by_role"], {"admin": 1, "staff": 1, "customer": 1})
