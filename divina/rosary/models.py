from django.db import models


class RosaryDecade(models.Model):
    """One mystery (decade) of the rosary prayed as a Lectio Divina"""
    CATEGORY_CHOICES = [
        ('joyful', 'Joyful Mysteries'),
        ('luminous', 'Luminous Mysteries'),
        ('sorrowful', 'Sorrowful Mysteries'),
        ('glorious', 'Glorious Mysteries'),
    ]

    lang = models.CharField(max_length=5, default='sk')
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES)
    title = models.CharField(max_length=255)
    bible_text = models.TextField(blank=True)
    intro = models.TextField(blank=True)
    intro_audio = models.CharField(max_length=500, blank=True)
    illustration_url = models.CharField(max_length=500, blank=True)
    opening_prayers = models.TextField(blank=True)
    opening_prayers_audio = models.CharField(max_length=500, blank=True)
    lectio_text = models.TextField(blank=True)
    lectio_audio = models.CharField(max_length=500, blank=True)
    commentary = models.TextField(blank=True)
    commentary_audio = models.CharField(max_length=500, blank=True)
    meditatio_text = models.TextField(blank=True)
    meditatio_audio = models.CharField(max_length=500, blank=True)
    oratio_html = models.TextField(blank=True)
    oratio_audio = models.CharField(max_length=500, blank=True)
    contemplatio_text = models.TextField(blank=True)
    contemplatio_audio = models.CharField(max_length=500, blank=True)
    actio_text = models.TextField(blank=True)
    actio_audio = models.CharField(max_length=500, blank=True)
    recording_audio = models.CharField(max_length=500, blank=True, help_text="Complete recording of the decade")
    author = models.CharField(max_length=255, blank=True)
    is_published = models.BooleanField(default=False)
    order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.get_category_display()} - {self.title} ({self.lang})"

    @property
    def has_audio(self):
        return any(getattr(self, field) for field in [
            'intro_audio', 'opening_prayers_audio', 'lectio_audio', 'commentary_audio', 'meditatio_audio',
            'oratio_audio', 'contemplatio_audio', 'actio_audio', 'recording_audio',
        ])

    class Meta:
        db_table = 'rosary_decades'
        ordering = ['category', 'lang', 'order', 'id']
        indexes = [
            models.Index(fields=['category', 'lang', 'order'], name='rosary_cat_lang_order_idx'),
        ]
