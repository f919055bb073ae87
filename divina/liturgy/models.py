from django.db import models


class LiturgicalYear(models.Model):
    """Lectionary cycles of one liturgical year for one calendar locale"""
    CYCLE_CHOICES = [
        ('A', 'Year A'),
        ('B', 'Year B'),
        ('C', 'Year C'),
    ]
    FERIAL_CHOICES = [
        (1, 'Year I'),
        (2, 'Year II'),
    ]

    year = models.IntegerField()
    locale_code = models.CharField(max_length=10, default='sk')
    lectionary_cycle = models.CharField(max_length=1, choices=CYCLE_CHOICES)
    ferial_lectionary = models.PositiveSmallIntegerField(choices=FERIAL_CHOICES)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    is_generated = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.year} ({self.locale_code}) - {self.lectionary_cycle}/{self.ferial_lectionary}"

    class Meta:
        db_table = 'liturgical_years'
        ordering = ['-year', 'locale_code']
        unique_together = [['year', 'locale_code']]


class LiturgicalCalendarDay(models.Model):
    """One day of the liturgical calendar with its main and optional alternative celebration"""
    date = models.DateField()
    locale_code = models.CharField(max_length=10, default='sk')
    season = models.CharField(max_length=50, blank=True)
    season_week = models.IntegerField(null=True, blank=True)
    weekday = models.CharField(max_length=20, blank=True)
    celebration_title = models.CharField(max_length=255, blank=True)
    celebration_rank = models.CharField(max_length=255, blank=True)
    celebration_rank_num = models.FloatField(null=True, blank=True)
    celebration_colour = models.CharField(max_length=20, blank=True)
    alternative_celebration_title = models.CharField(max_length=255, blank=True, null=True)
    alternative_celebration_rank = models.CharField(max_length=255, blank=True, null=True)
    alternative_celebration_rank_num = models.FloatField(null=True, blank=True)
    alternative_celebration_colour = models.CharField(max_length=20, blank=True, null=True)
    lectio_key = models.CharField(max_length=100, blank=True, null=True, help_text="Chapter key linking the day to its lectio sources")
    name_days = models.CharField(max_length=255, blank=True, null=True)
    liturgical_year = models.ForeignKey(LiturgicalYear, on_delete=models.SET_NULL, null=True, blank=True, related_name='days')
    source_api = models.CharField(max_length=100, blank=True)
    is_custom_edit = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.date} ({self.locale_code}) {self.celebration_title}"

    class Meta:
        db_table = 'liturgical_calendar'
        ordering = ['date', 'locale_code']
        unique_together = [['date', 'locale_code']]
        indexes = [
            models.Index(fields=['date'], name='liturgical_cal_date_idx'),
            models.Index(fields=['lectio_key'], name='liturgical_cal_key_idx'),
        ]
