from django.contrib import admin

from .models import SiteUpdate, SiteUpdateRead


@admin.register(SiteUpdate)
class SiteUpdateAdmin(admin.ModelAdmin):
    list_display = ['id', 'title', 'created_by', 'created_at']
    search_fields = ['title', 'body']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(SiteUpdateRead)
class SiteUpdateReadAdmin(admin.ModelAdmin):
    list_display = ['site_update', 'user_id', 'read_at']
    search_fields = ['user_id']
