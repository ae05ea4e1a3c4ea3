from unittest.mock import MagicMock, patch

import requests
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from conversations import services
from conversations.models import Conversation, Message
from conversations.notifications import InboxNotifier
from memberhub.identity import Caller
from memberhub.jwt_utils import generate_test_token
from profiles.models import Profile


class SendAdminMessageTest(TestCase):
    def setUp(self):
        self.admin = Caller(user_id="admin-1", is_creator=True)
        self.member = Caller(user_id="member-1")
        Profile.objects.create(id="admin-1", full_name="Site Admin", is_creator=True)
        self.recipient = Profile.objects.create(id="member-1", full_name="Mia Member")
        self.notifier = MagicMock()

    def test_sends_message_with_subject(self):
        result = services.send_admin_message(
            self.admin, "member-1", "  Welcome aboard  ", subject="Hello", notifier=self.notifier
        )

        self.assertEqual(result, {'success': True})
        message = Message.objects.get()
        self.assertEqual(message.body, "**Hello**\n\nWelcome aboard")
        self.assertEqual(message.sender_id, "admin-1")
        conversation = message.conversation
        self.assertEqual(conversation.last_message_at, message.created_at)
        self.assertTrue(conversation.is_unread_for("member-1"))
        self.assertFalse(conversation.is_unread_for("admin-1"))

    def test_reuses_existing_conversation(self):
        existing = Conversation.objects.create(participant_one="member-1", participant_two="admin-1", created_by="member-1")

        services.send_admin_message(self.admin, "member-1", "ping", notifier=self.notifier)

        self.assertEqual(Conversation.objects.count(), 1)
        self.assertEqual(Message.objects.get().conversation_id, existing.pk)

    def test_rejections(self):
        cases = [
            (self.member, "member-1", "hi", "Not authorized"),
            (None, "member-1", "hi", "Not authenticated"),
            (self.admin, "", "hi", "Recipient ID is required"),
            (self.admin, "member-1", "   ", "Message body cannot be empty"),
            (self.admin, "admin-1", "hi", "Cannot message yourself"),
            (self.admin, "ghost", "hi", "Recipient not found"),
        ]
        for caller, recipient, body, error in cases:
            with self.subTest(error=error):
                result = services.send_admin_message(caller, recipient, body, notifier=self.notifier)
                self.assertEqual(result, {'success': False, 'error': error})
        self.assertFalse(Message.objects.exists())
        self.notifier.notify.assert_not_called()

    def test_notifies_only_when_recipient_opted_in(self):
        services.send_admin_message(self.admin, "member-1", "first", notifier=self.notifier)
        self.notifier.notify.assert_not_called()

        self.recipient.inbox_emails_enabled = True
        self.recipient.save()
        services.send_admin_message(self.admin, "member-1", "second", notifier=self.notifier)
        self.notifier.notify.assert_called_once_with("member-1", sender_name="Site Admin")


class InboxNotifierTest(TestCase):
    def test_skips_when_not_configured(self):
        with patch('conversations.notifications.requests.post') as post:
            self.assertFalse(InboxNotifier(url="").notify("member-1"))
        post.assert_not_called()

    def test_posts_recipient_and_sender(self):
        notifier = InboxNotifier(url="https://functions.example.com/notify-inbox", secret="s3cret",
                                 api_key="anon-key", timeout=3)
        with patch('conversations.notifications.requests.post') as post:
            post.return_value.status_code = 200
            self.assertTrue(notifier.notify("member-1"))

        post.assert_called_once_with(
            "https://functions.example.com/notify-inbox",
            headers={
                'Content-Type': 'application/json',
                'Authorization': "Bearer anon-key",
                'x-function-secret': "s3cret",
            },
            json={'recipient_user_id': "member-1", 'sender_name': "Site Admin"},
            timeout=3,
        )

    def test_failures_are_logged_not_raised(self):
        notifier = InboxNotifier(url="https://functions.example.com/notify-inbox")

        with patch('conversations.notifications.requests.post', side_effect=requests.ConnectionError("down")):
            with self.assertLogs('conversations.notifications', level='WARNING'):
                self.assertFalse(notifier.notify("member-1"))

        with patch('conversations.notifications.requests.post') as post:
            post.return_value.status_code = 500
            with self.assertLogs('conversations.notifications', level='WARNING'):
                self.assertFalse(notifier.notify("member-1"))


@override_settings(INBOX_NOTIFY_URL="")
class AdminMessageViewTest(APITestCase):
    def setUp(self):
        Profile.objects.create(id="admin-1", full_name="Site Admin", is_creator=True)
        Profile.objects.create(id="member-1", full_name="Mia Member")
        self.url = reverse('conversations:admin-message')

    def test_creator_can_send(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {generate_test_token('admin-1')}")

        response = self.client.post(self.url, {'recipient_id': 'member-1', 'body': 'Welcome'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data, {'success': True})

    def test_failed_send_reports_error(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {generate_test_token('admin-1')}")

        response = self.client.post(self.url, {'recipient_id': 'member-1', 'body': ''}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'success': False, 'error': "Message body cannot be empty"})

    def test_member_is_forbidden(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {generate_test_token('member-1')}")

        response = self.client.post(self.url, {'recipient_id': 'admin-1', 'body': 'hi'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
