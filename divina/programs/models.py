from django.db import models
from divina.core.utils import unique_slug


class ProgramCategory(models.Model):
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True, blank=True)
    description = models.TextField(blank=True)
    color = models.CharField(max_length=20, blank=True)
    icon = models.CharField(max_length=50, blank=True)
    display_order = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slug(ProgramCategory, self.name, exclude_pk=self.pk, fallback='category')
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'program_categories'
        ordering = ['display_order', 'name']
        verbose_name_plural = 'Program categories'


class Program(models.Model):
    """A multi-session spiritual program (retreat, course, novena...)"""
    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, blank=True)
    category = models.ForeignKey(ProgramCategory, on_delete=models.PROTECT, related_name='programs')
    description = models.TextField(blank=True)
    image_url = models.CharField(max_length=500, blank=True)
    author = models.CharField(max_length=255, blank=True)
    lang = models.CharField(max_length=5, default='sk')
    total_sessions = models.IntegerField(default=0)
    total_duration_minutes = models.IntegerField(default=0)
    is_featured = models.BooleanField(default=False)
    is_published = models.BooleanField(default=False)
    display_order = models.IntegerField(default=0)
    published_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def save(self, *args, **kwargs):
        """Generate a slug from the title when none was given"""
        if not self.slug:
            self.slug = unique_slug(Program, self.title, exclude_pk=self.pk, fallback='program', lang=self.lang)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.title} ({self.lang})"

    class Meta:
        db_table = 'programs'
        ordering = ['-is_featured', 'display_order', 'title']
        indexes = [
            models.Index(fields=['slug', 'lang'], name='programs_slug_lang_idx'),
            models.Index(fields=['is_published', 'lang'], name='programs_pub_lang_idx'),
        ]


class ProgramSession(models.Model):
    program = models.ForeignKey(Program, on_delete=models.CASCADE, related_name='sessions')
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    session_order = models.IntegerField()
    duration_minutes = models.FloatField(default=0)
    is_published = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.program.title} #{self.session_order}: {self.title}"

    class Meta:
        db_table = 'program_sessions'
        ordering = ['program_id', 'session_order']
        unique_together = [['program', 'session_order']]


class SessionMedia(models.Model):
    MEDIA_TYPE_CHOICES = [
        ('video', 'Video'),
        ('audio', 'Audio'),
        ('text', 'Text/HTML'),
        ('image', 'Image'),
    ]

    session = models.ForeignKey(ProgramSession, on_delete=models.CASCADE, related_name='media')
    media_type = models.CharField(max_length=10, choices=MEDIA_TYPE_CHOICES, default='text')
    title = models.CharField(max_length=255, blank=True)
    content = models.TextField(help_text="HTML for text media, URL otherwise")
    media_order = models.IntegerField()
    duration_minutes = models.FloatField(null=True, blank=True)
    thumbnail_url = models.CharField(max_length=500, blank=True)
    file_size_mb = models.FloatField(null=True, blank=True)
    is_published = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.title or f"{self.get_media_type_display()} #{self.media_order}"

    class Meta:
        db_table = 'session_media'
        ordering = ['session_id', 'media_order']
        unique_together = [['session', 'media_order']]
        verbose_name_plural = 'Session media'
