from django.db import models


class LectioSource(models.Model):
    """
    Lectio Divina reading for one chapter key, language and lectionary cycle.

    Calendar days point at readings through ``chapter_key``; the cycle is
    A, B or C for Sundays and feasts and N for ordinary weekdays.
    """
    CYCLE_CHOICES = [
        ('A', 'Year A'),
        ('B', 'Year B'),
        ('C', 'Year C'),
        ('N', 'Weekday'),
    ]
    BIBLE_KEYS = ['bible_1', 'bible_2', 'bible_3']

    lang = models.CharField(max_length=5, default='sk')
    locale = models.ForeignKey('i18n.Locale', on_delete=models.SET_NULL, null=True, blank=True, related_name='lectio_sources')
    book = models.CharField(max_length=100, blank=True)
    chapter = models.CharField(max_length=20, blank=True)
    chapter_key = models.CharField(max_length=100, help_text="Key referenced by liturgical calendar days")
    scripture_reference = models.CharField(max_length=255, blank=True)
    cycle = models.CharField(max_length=1, choices=CYCLE_CHOICES, default='N')
    id_number = models.IntegerField(null=True, blank=True)

    intro = models.TextField(blank=True)
    intro_audio = models.CharField(max_length=500, blank=True)
    opening_prayer = models.TextField(blank=True)
    opening_prayer_audio = models.CharField(max_length=500, blank=True)

    bible_1_title = models.CharField(max_length=255, blank=True)
    bible_1 = models.TextField(blank=True)
    bible_1_audio = models.CharField(max_length=500, blank=True)
    bible_2_title = models.CharField(max_length=255, blank=True)
    bible_2 = models.TextField(blank=True)
    bible_2_audio = models.CharField(max_length=500, blank=True)
    bible_3_title = models.CharField(max_length=255, blank=True)
    bible_3 = models.TextField(blank=True)
    bible_3_audio = models.CharField(max_length=500, blank=True)

    lectio_text = models.TextField(blank=True)
    lectio_audio = models.CharField(max_length=500, blank=True)
    meditatio_text = models.TextField(blank=True)
    meditatio_audio = models.CharField(max_length=500, blank=True)
    oratio_text = models.TextField(blank=True)
    oratio_audio = models.CharField(max_length=500, blank=True)
    contemplatio_text = models.TextField(blank=True)
    contemplatio_audio = models.CharField(max_length=500, blank=True)
    actio_text = models.TextField(blank=True)
    actio_audio = models.CharField(max_length=500, blank=True)

    closing_prayer = models.TextField(blank=True)
    blessing = models.TextField(blank=True)
    video_url = models.CharField(max_length=500, blank=True)
    audio_5_min = models.CharField(max_length=500, blank=True)
    reference = models.TextField(blank=True)
    source_material = models.TextField(blank=True)
    checked = models.BooleanField(default=False, help_text="Reviewed and approved for the daily preview")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.chapter_key} ({self.lang}/{self.cycle})"

    @property
    def has_audio(self):
        return any(getattr(self, field) for field in [
            'opening_prayer_audio', 'bible_1_audio', 'bible_2_audio', 'bible_3_audio',
            'lectio_audio', 'meditatio_audio', 'oratio_audio', 'contemplatio_audio',
            'actio_audio', 'audio_5_min',
        ])

    class Meta:
        db_table = 'lectio_sources'
        ordering = ['chapter_key', 'lang', 'cycle']
        unique_together = [['chapter_key', 'lang', 'cycle']]
        indexes = [
            models.Index(fields=['chapter_key', 'lang'], name='lectio_src_key_lang_idx'),
        ]
