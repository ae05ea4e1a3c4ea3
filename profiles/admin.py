from django.contrib import admin

from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ['id', 'full_name', 'username', 'email', 'is_creator', 'is_active', 'created_at']
    list_filter = ['is_creator', 'is_active', 'inbox_emails_enabled']
    search_fields = ['id', 'full_name', 'display_name', 'username', 'email']
    readonly_fields = ['created_at', 'updated_at']
