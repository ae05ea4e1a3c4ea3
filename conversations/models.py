import uuid

from django.db import models

from .read_state import is_unread

PAIR_KEY_SEPARATOR = '|'


def canonical_pair_key(user_a, user_b):
    """
    Order-independent key for the two participants of a conversation.

    The first id is length-prefixed so ids containing the separator cannot
    collide with another pair.
    """
    first, second = sorted([str(user_a), str(user_b)])
    return f"{len(first)}:{first}{PAIR_KEY_SEPARATOR}{second}"


class Conversation(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    participant_one = models.CharField(max_length=100, db_index=True)
    participant_two = models.CharField(max_length=100, db_index=True)
    participant_key = models.CharField(max_length=210, unique=True, editable=False)
    created_by = models.CharField(max_length=100)
    last_message_at = models.DateTimeField(null=True, blank=True)
    participant_one_last_read_at = models.DateTimeField(null=True, blank=True)
    participant_two_last_read_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'conversations'
        indexes = [
            models.Index(fields=['last_message_at'], name='conversations_last_msg_idx'),
        ]

    def save(self, *args, **kwargs):
        self.participant_key = canonical_pair_key(self.participant_one, self.participant_two)
        super().save(*args, **kwargs)

    def has_participant(self, user_id):
        return user_id in (self.participant_one, self.participant_two)

    def other_participant(self, user_id):
        return self.participant_two if self.participant_one == user_id else self.participant_one

    def last_read_field_for(self, user_id):
        """Name of the cursor column belonging to user_id."""
        if self.participant_one == user_id:
            return 'participant_one_last_read_at'
        if self.participant_two == user_id:
            return 'participant_two_last_read_at'
        raise ValueError(f"{user_id} is not a participant of conversation {self.pk}")

    def last_read_at_for(self, user_id):
        return getattr(self, self.last_read_field_for(user_id))

    def is_unread_for(self, user_id):
        return is_unread(self.last_message_at, self.last_read_at_for(user_id))

    def __str__(self):
        return f"Conversation {self.pk} ({self.participant_one}, {self.participant_two})"


class Message(models.Model):
    conversation = models.ForeignKey(Conversation, on_delete=models.CASCADE, related_name='messages')
    sender_id = models.CharField(max_length=100)
    body = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'messages'
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['conversation', 'created_at'], name='messages_conv_created_idx'),
        ]

    def __str__(self):
        return f"{self.sender_id}: {self.body[:50]}"
