from django.conf import settings
from django.db import models


class Note(models.Model):
    """Personal note of a user, optionally tied to a Bible passage"""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notes')
    title = models.CharField(max_length=255)
    content = models.TextField()
    bible_reference = models.CharField(max_length=255, null=True, blank=True)
    bible_quote = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.title} ({self.user})"

    class Meta:
        db_table = 'notes'
        ordering = ['-updated_at']
        indexes = [
            models.Index(fields=['user', '-updated_at'], name='notes_user_updated_idx'),
        ]
