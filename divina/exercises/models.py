from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from divina.core.utils import unique_slug


class SpiritualExercise(models.Model):
    """A retreat (duchovné cvičenia) with its dates, venue and leader"""
    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True, blank=True)
    description = models.TextField(blank=True)
    full_description = models.TextField(blank=True)
    image_url = models.CharField(max_length=500, blank=True)
    home_image_url = models.CharField(max_length=500, blank=True)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    location_name = models.CharField(max_length=255)
    location_address = models.CharField(max_length=255, blank=True)
    location_city = models.CharField(max_length=100, blank=True)
    location_country = models.CharField(max_length=100, default='Slovensko')
    locale = models.ForeignKey('i18n.Locale', on_delete=models.SET_NULL, null=True, blank=True,
                               related_name='spiritual_exercises')
    leader_name = models.CharField(max_length=255, blank=True)
    leader_bio = models.TextField(blank=True)
    leader_photo = models.CharField(max_length=500, blank=True)
    max_capacity = models.PositiveIntegerField(null=True, blank=True)
    is_published = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='spiritual_exercises')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slug(SpiritualExercise, self.title, exclude_pk=self.pk, fallback='exercise')
        super().save(*args, **kwargs)

    def __str__(self):
        return self.title

    class Meta:
        db_table = 'spiritual_exercises'
        ordering = ['start_date', 'id']
        indexes = [
            models.Index(fields=['is_published', 'is_active', 'start_date'], name='exercises_public_idx'),
        ]


class ExercisePricing(models.Model):
    exercise = models.ForeignKey(SpiritualExercise, on_delete=models.CASCADE, related_name='pricing')
    room_type = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    deposit = models.DecimalField(max_digits=10, decimal_places=2, default=0, validators=[MinValueValidator(0)])
    description = models.TextField(blank=True)
    display_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.exercise.title} - {self.room_type}"

    class Meta:
        db_table = 'spiritual_exercises_pricing'
        ordering = ['exercise_id', 'display_order', 'id']


class ExerciseTestimonial(models.Model):
    exercise = models.ForeignKey(SpiritualExercise, on_delete=models.CASCADE, related_name='testimonials')
    author_name = models.CharField(max_length=255)
    testimonial_text = models.TextField()
    rating = models.PositiveSmallIntegerField(null=True, blank=True,
                                              validators=[MinValueValidator(1), MaxValueValidator(5)])
    display_order = models.IntegerField(default=0)
    is_visible = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.author_name} ({self.exercise.title})"

    class Meta:
        db_table = 'spiritual_exercises_testimonials'
        ordering = ['exercise_id', 'display_order', 'id']


class ExerciseGalleryImage(models.Model):
    exercise = models.ForeignKey(SpiritualExercise, on_delete=models.CASCADE, related_name='gallery')
    image_url = models.CharField(max_length=500)
    caption = models.CharField(max_length=255, blank=True)
    alt_text = models.CharField(max_length=255, blank=True)
    display_order = models.IntegerField(default=0)
    is_visible = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.caption or self.image_url

    class Meta:
        db_table = 'spiritual_exercises_gallery'
        ordering = ['exercise_id', 'display_order', 'id']


class ExerciseForm(models.Model):
    """Registration form embedded from the external forms service"""
    exercise = models.ForeignKey(SpiritualExercise, on_delete=models.CASCADE, related_name='forms')
    form_id = models.CharField(max_length=100)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.form_id

    class Meta:
        db_table = 'spiritual_exercises_forms'
        ordering = ['exercise_id', 'id']
