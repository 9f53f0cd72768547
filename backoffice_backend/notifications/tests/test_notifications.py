# notifications/tests/test_notifications.py

from unittest import mock

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from notifications.models import Notification
from notifications.services.notification_service import (
    create_notification,
    notify,
    notify_on_commit,
    unread_count,
)

User = get_user_model()


class NotificationServiceTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(email="reader@example.com", password="pass12345")

    def test_notify_swallows_failures(self):
        with mock.patch.object(Notification.objects, "create", side_effect=RuntimeError("db down")):
            with self.assertLogs("notifications.services.notification_service", level="ERROR"):
                self.assertIsNone(notify(recipient=self.user, title="t", message="m"))

    def test_notify_on_commit_waits_for_commit(self):
        with self.captureOnCommitCallbacks(execute=False) as callbacks:
            notify_on_commit(recipient=self.user, title="Hello", message="World")

        self.assertEqual(Notification.objects.count(), 0)
        self.assertEqual(len(callbacks), 1)

        callbacks[0]()
        self.assertEqual(unread_count(self.user), 1)


class NotificationApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.alice = User.objects.create_user(email="alice@example.com", password="pass12345")
        self.bob = User.objects.create_user(email="bob@example.com", password="pass12345")
        self.staff = User.objects.create_user(email="staff@example.com", password="pass12345", role="staff")

        self.first = create_notification(recipient=self.alice, title="One", message="1", type="order")
        self.second = create_notification(recipient=self.alice, title="Two", message="2", type="system")
        self.other = create_notification(recipient=self.bob, title="Bob's", message="b")

    def test_inbox_is_private_and_counts_unread(self):
        self.client.force_authenticate(self.alice)

        res = self.client.get("/api/notifications/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 2)
        self.assertEqual(res.data["unread_count"], 2)

        res = self.client.get("/api/notifications/", {"type": "order"})
        self.assertEqual(res.data["count"], 1)

        self.assertEqual(self.client.get(f"/api/notifications/{self.other.pk}/").status_code, 404)

    def test_mark_read_and_read_all(self):
        self.client.force_authenticate(self.alice)

        res = self.client.patch(f"/api/notifications/{self.first.pk}/read/")
        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data["is_read"])
        self.assertIsNotNone(res.data["read_at"])

        res = self.client.get("/api/notifications/unread-count/")
        self.assertEqual(res.data["unread_count"], 1)

        res = self.client.post("/api/notifications/read-all/")
        self.assertEqual(res.data["updated"], 1)

        self.assertEqual(unread_count(self.bob), 1)

    def test_delete_own_notification(self):
        self.client.force_authenticate(self.alice)

        self.assertEqual(self.client.delete(f"/api/notifications/{self.first.pk}/").status_code, 204)
        self.assertEqual(self.client.delete(f"/api/notifications/{self.other.pk}/").status_code, 404)

    def test_create_requires_send_capability(self):
        payload = {"recipient": str(self.bob.pk), "title": "Restock", "message": "Shelf 4 is empty", "type": "stock"}

        self.client.force_authenticate(self.alice)
        self.assertEqual(self.client.post("/api/notifications/", payload, format="json").status_code, 403)

        self.client.force_authenticate(self.staff)
        res = self.client.post("/api/notifications/", payload, format="json")
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["recipient"], self.bob.pk)
        self.assertEqual(unread_count(self.bob), 2)
