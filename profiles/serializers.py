from rest_framework import serializers

from .models import Profile


class ProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = Profile
        fields = [
            'id', 'full_name', 'display_name', 'username', 'email', 'avatar_url',
            'is_creator', 'inbox_emails_enabled', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'is_creator', 'created_at', 'updated_at']

    def validate_username(self, value):
        if value is None:
            return value
        value = value.strip()
        if not value:
            return None
        if len(value) < 2:
            raise serializers.ValidationError("Username must be at least 2 characters.")
        return value


class PublicProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = Profile
        fields = ['id', 'full_name', 'display_name', 'username', 'avatar_url']
