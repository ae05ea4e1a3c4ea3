from django.contrib import admin

from .models import Conversation, Message


@admin.register(Conversation)
class ConversationAdmin(admin.ModelAdmin):
    list_display = ['id', 'participant_one', 'participant_two', 'created_by', 'last_message_at', 'created_at']
    list_filter = ['created_at', 'last_message_at']
    search_fields = ['id', 'participant_one', 'participant_two']
    readonly_fields = ['participant_key', 'created_at', 'updated_at']


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ['id', 'conversation', 'sender_id', 'body_preview', 'created_at']
    list_filter = ['created_at']
    search_fields = ['body', 'sender_id', 'conversation__id']
    readonly_fields = ['created_at']

    @admin.display(description='Body Preview')
    def body_preview(self, obj):
        return obj.body[:50] + "..." if len(obj.body) > 50 else obj.body
