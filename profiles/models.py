from django.db import models

UNKNOWN_USER_NAME = "Unknown User"


class Profile(models.Model):
    id = models.CharField(max_length=100, primary_key=True)
    full_name = models.CharField(max_length=255, null=True, blank=True)
    display_name = models.CharField(max_length=255, null=True, blank=True)
    username = models.CharField(max_length=100, unique=True, null=True, blank=True)
    email = models.EmailField(max_length=255, null=True, blank=True)
    avatar_url = models.URLField(max_length=500, null=True, blank=True)
    is_creator = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    inbox_emails_enabled = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'profiles'
        indexes = [
            models.Index(fields=['full_name'], name='profiles_full_name_idx'),
            models.Index(fields=['email'], name='profiles_email_idx'),
        ]

    @property
    def name(self):
        """full_name, then display_name, then username."""
        return self.full_name or self.display_name or self.username or UNKNOWN_USER_NAME

    def __str__(self):
        return f"{self.name} ({self.id})"
