"""
Conversation-level read state.

A participant has read a conversation when their last-read timestamp is at
or after the conversation's last activity. A missing cursor means nothing
has been read yet.
"""

from django.db import models


class ReadState(models.TextChoices):
    READ = 'read', 'Read'
    UNREAD = 'unread', 'Unread'


def resolve_read_state(last_message_at, last_read_at):
    if last_message_at is None:
        return ReadState.READ
    if last_read_at is None or last_message_at > last_read_at:
        return ReadState.UNREAD
    return ReadState.READ


def is_unread(last_message_at, last_read_at):
    return resolve_read_state(last_message_at, last_read_at) == ReadState.UNREAD
