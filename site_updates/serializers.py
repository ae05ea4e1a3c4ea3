from rest_framework import serializers

from .models import SiteUpdate


class MemberSiteUpdateSerializer(serializers.Serializer):
    """Site update as shown in a member's inbox"""
    id = serializers.UUIDField()
    title = serializers.CharField(allow_blank=True)
    body = serializers.CharField()
    created_at = serializers.DateTimeField()
    admin_name = serializers.CharField()
    admin_avatar_url = serializers.CharField(allow_null=True)
    is_read = serializers.BooleanField()


class SiteUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = SiteUpdate
        fields = ['id', 'title', 'body', 'created_by', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_by', 'created_at', 'updated_at']


class SiteUpdateInputSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255, allow_blank=True, allow_null=True, required=False, default=None)
    body = serializers.CharField(allow_blank=True)
