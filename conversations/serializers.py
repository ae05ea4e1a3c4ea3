from rest_framework import serializers

from .models import Message


class MessageSerializer(serializers.ModelSerializer):
    class Meta:
        model = Message
        fields = ['id', 'conversation', 'sender_id', 'body', 'created_at']
        read_only_fields = fields


class ConversationMessageSerializer(serializers.Serializer):
    """Message as shown in a conversation thread, with sender display data"""
    id = serializers.IntegerField()
    body = serializers.CharField()
    sender_id = serializers.CharField()
    sender_name = serializers.CharField(allow_null=True)
    sender_avatar_url = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()


class ConversationSummarySerializer(serializers.Serializer):
    """Inbox list entry for one conversation"""
    id = serializers.UUIDField()
    participant_one = serializers.CharField()
    participant_two = serializers.CharField()
    last_message_at = serializers.DateTimeField(allow_null=True)
    participant_one_last_read_at = serializers.DateTimeField(allow_null=True)
    participant_two_last_read_at = serializers.DateTimeField(allow_null=True)
    other_user_id = serializers.CharField()
    other_user_name = serializers.CharField()
    other_user_username = serializers.CharField(allow_null=True)
    other_user_avatar_url = serializers.CharField(allow_null=True)
    latest_message_body = serializers.CharField(allow_null=True)
    latest_message_sender_name = serializers.CharField(allow_null=True)
    latest_message_sender_avatar_url = serializers.CharField(allow_null=True)
    is_unread = serializers.BooleanField()


class ConversationStartSerializer(serializers.Serializer):
    other_user_id = serializers.CharField(max_length=100)


class SendMessageSerializer(serializers.Serializer):
    # Bounds and markup stripping are applied by the service layer
    body = serializers.CharField(allow_blank=True, trim_whitespace=False)


class AdminMessageSerializer(serializers.Serializer):
    recipient_id = serializers.CharField(max_length=100, allow_blank=True, required=False, default='')
    subject = serializers.CharField(allow_blank=True, required=False, allow_null=True, default=None)
    body = serializers.CharField(allow_blank=True, trim_whitespace=False, required=False, default='')

