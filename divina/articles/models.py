from django.conf import settings
from django.db import models
from django.utils import timezone
from divina.core.models import LANGUAGE_CHOICES
from divina.core.utils import unique_slug


class ArticleCategory(models.Model):
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True, blank=True)
    description = models.TextField(blank=True)
    color = models.CharField(max_length=20, default='#3B82F6')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slug(ArticleCategory, self.name, exclude_pk=self.pk, fallback='category')
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'article_categories'
        ordering = ['name']
        verbose_name_plural = 'Article categories'


class Article(models.Model):
    STATUS_CHOICES = [
        ('draft', 'Draft'),
        ('published', 'Published'),
        ('archived', 'Archived'),
    ]

    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, blank=True)
    excerpt = models.TextField(blank=True)
    content = models.TextField(blank=True)
    featured_image = models.CharField(max_length=500, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='draft')
    lang = models.CharField(max_length=5, choices=LANGUAGE_CHOICES, default='sk')
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                               related_name='articles')
    category = models.ForeignKey(ArticleCategory, on_delete=models.SET_NULL, null=True, blank=True,
                                 related_name='articles')
    tags = models.JSONField(default=list, blank=True)
    seo_title = models.CharField(max_length=255, blank=True)
    seo_description = models.TextField(blank=True)
    view_count = models.PositiveIntegerField(default=0)
    like_count = models.PositiveIntegerField(default=0)
    published_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def save(self, *args, **kwargs):
        """Slug unique per language; publishing stamps published_at once"""
        if not self.slug:
            self.slug = unique_slug(Article, self.title, exclude_pk=self.pk, fallback='article', lang=self.lang)
        if self.status == 'published' and self.published_at is None:
            self.published_at = timezone.now()
        super().save(*args, **kwargs)

    def __str__(self):
        return self.title

    class Meta:
        db_table = 'articles'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['status', '-created_at'], name='articles_status_created_idx'),
            models.Index(fields=['slug', 'lang'], name='articles_slug_lang_idx'),
        ]


class ArticleBlock(models.Model):
    """One content block of an article; blocks render in position order"""
    BLOCK_TYPE_CHOICES = [
        ('text', 'Text'),
        ('image', 'Image gallery'),
        ('video', 'Video'),
        ('address', 'Address'),
        ('button', 'Button'),
        ('source', 'Embed source'),
    ]

    article = models.ForeignKey(Article, on_delete=models.CASCADE, related_name='blocks')
    block_type = models.CharField(max_length=20, choices=BLOCK_TYPE_CHOICES)
    data = models.JSONField(default=dict, blank=True)
    position = models.IntegerField(default=0)

    def __str__(self):
        return f"{self.article.title} - {self.block_type} #{self.position}"

    class Meta:
        db_table = 'article_blocks'
        ordering = ['article_id', 'position']
