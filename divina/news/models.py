from django.db import models
from django.utils import timezone


class News(models.Model):
    title = models.CharField(max_length=255)
    summary = models.TextField(blank=True)
    image_url = models.CharField(max_length=500, blank=True)
    content = models.TextField(blank=True)
    audio_url = models.CharField(max_length=500, blank=True)
    lang = models.CharField(max_length=5, default='sk')
    published_at = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.title

    class Meta:
        db_table = 'news'
        ordering = ['-published_at', '-id']
        verbose_name_plural = 'News'
        indexes = [
            models.Index(fields=['lang', '-published_at'], name='news_lang_published_idx'),
        ]
