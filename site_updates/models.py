import uuid

from django.db import models


class SiteUpdate(models.Model):
    """Announcement broadcast by an admin to every member"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255, blank=True, default='')
    body = models.TextField()
    created_by = models.CharField(max_length=100, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'site_updates'
        ordering = ['-created_at']

    def __str__(self):
        return self.title or self.body[:50]


class SiteUpdateRead(models.Model):
    """Read receipt of one member for one site update"""
    site_update = models.ForeignKey(SiteUpdate, on_delete=models.CASCADE, related_name='reads')
    user_id = models.CharField(max_length=100, db_index=True)
    read_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'site_update_reads'
        constraints = [
            models.UniqueConstraint(fields=['site_update', 'user_id'], name='uq_site_update_read_user'),
        ]

    def __str__(self):
        return f"{self.user_id} read {self.site_update_id}"
