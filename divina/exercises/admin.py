from django.contrib import admin
from .models import SpiritualExercise, ExercisePricing, ExerciseTestimonial, ExerciseGalleryImage, ExerciseForm


class ExercisePricingInline(admin.TabularInline):
    model = ExercisePricing
    extra = 0


class ExerciseTestimonialInline(admin.StackedInline):
    model = ExerciseTestimonial
    extra = 0


class ExerciseGalleryImageInline(admin.TabularInline):
    model = ExerciseGalleryImage
    extra = 0


class ExerciseFormInline(admin.TabularInline):
    model = ExerciseForm
    extra = 0


@admin.register(SpiritualExercise)
class SpiritualExerciseAdmin(admin.ModelAdmin):
    list_display = ['title', 'start_date', 'end_date', 'location_city', 'locale', 'is_published', 'is_active']
    list_filter = ['is_published', 'is_active', 'locale']
    search_fields = ['title', 'location_name', 'leader_name']
    date_hierarchy = 'start_date'
    readonly_fields = ['created_by', 'created_at', 'updated_at']
    inlines = [ExercisePricingInline, ExerciseTestimonialInline, ExerciseGalleryImageInline, ExerciseFormInline]
