"""
Outbound inbox notification hook.

When a recipient has opted into inbox emails, an external function is asked
to deliver the email. Delivery itself happens outside this service.
"""

import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

ADMIN_SENDER_NAME = "Site Admin"


class InboxNotifier:
    """Client for the external notify-inbox function"""

    def __init__(self, url=None, secret=None, api_key=None, timeout=None):
        self.url = url if url is not None else getattr(settings, 'INBOX_NOTIFY_URL', '')
        self.secret = secret if secret is not None else getattr(settings, 'INBOX_NOTIFY_SECRET', '')
        self.api_key = api_key if api_key is not None else getattr(settings, 'INBOX_NOTIFY_API_KEY', '')
        self.timeout = timeout if timeout is not None else getattr(settings, 'INBOX_NOTIFY_TIMEOUT', 5)

    def _get_headers(self):
        headers = {'Content-Type': 'application/json'}
        if self.api_key:
            headers['Authorization'] = f"Bearer {self.api_key}"
        if self.secret:
            headers['x-function-secret'] = self.secret
        return headers

    def notify(self, recipient_id, sender_name=ADMIN_SENDER_NAME):
        """
        Ask the notify-inbox function to email recipient_id.

        Returns True when the function accepted the request. Failures are
        logged and reported as False; they never propagate to the caller.
        """
        if not self.url:
            logger.debug("INBOX_NOTIFY_URL not configured, skipping notification for %s", recipient_id)
            return False

        try:
            response = requests.post(
                self.url,
                headers=self._get_headers(),
                json={'recipient_user_id': recipient_id, 'sender_name': sender_name},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("Inbox notification for %s failed: %s", recipient_id, e)
            return False

        if response.status_code >= 400:
            logger.warning(
                "Inbox notification for %s rejected with status %s",
                recipient_id, response.status_code,
            )
            return False
        return True


def get_inbox_notifier():
    return InboxNotifier()
