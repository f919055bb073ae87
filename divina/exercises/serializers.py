from rest_framework import serializers
from .models import SpiritualExercise, ExercisePricing, ExerciseTestimonial, ExerciseGalleryImage, ExerciseForm


class ExercisePricingSerializer(serializers.ModelSerializer):
    class Meta:
        model = ExercisePricing
        fields = ['id', 'exercise', 'room_type', 'price', 'deposit', 'description', 'display_order', 'created_at']
        read_only_fields = ['exercise', 'created_at']

    def validate(self, attrs):
        price = attrs.get('price', getattr(self.instance, 'price', None))
        deposit = attrs.get('deposit', getattr(self.instance, 'deposit', 0))
        if price is not None and deposit is not None and deposit > price:
            raise serializers.ValidationError({'deposit': 'Deposit cannot exceed the price'})
        return attrs


class ExerciseTestimonialSerializer(serializers.ModelSerializer):
    class Meta:
        model = ExerciseTestimonial
        fields = ['id', 'exercise', 'author_name', 'testimonial_text', 'rating', 'display_order', 'is_visible',
                  'created_at']
        read_only_fields = ['exercise', 'created_at']


class ExerciseGalleryImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ExerciseGalleryImage
        fields = ['id', 'exercise', 'image_url', 'caption', 'alt_text', 'display_order', 'is_visible',
                  'created_at']
        read_only_fields = ['exercise', 'created_at']


class ExerciseFormSerializer(serializers.ModelSerializer):
    class Meta:
        model = ExerciseForm
        fields = ['id', 'exercise', 'form_id', 'is_active', 'created_at']
        read_only_fields = ['exercise', 'created_at']


class SpiritualExerciseSerializer(serializers.ModelSerializer):
    locale_detail = serializers.SerializerMethodField()

    class Meta:
        model = SpiritualExercise
        fields = ['id', 'title', 'slug', 'description', 'full_description', 'image_url', 'home_image_url',
                  'start_date', 'end_date', 'location_name', 'location_address', 'location_city',
                  'location_country', 'locale', 'locale_detail', 'leader_name', 'leader_bio', 'leader_photo',
                  'max_capacity', 'is_published', 'is_active', 'created_by', 'created_at', 'updated_at']
        read_only_fields = ['created_by', 'created_at', 'updated_at']

    def get_locale_detail(self, obj):
        if obj.locale is None:
            return None
        return {'id': obj.locale.id, 'code': obj.locale.code, 'native_name': obj.locale.native_name}

    def validate_title(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Title is required')
        return value

    def validate(self, attrs):
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': 'End date cannot be before the start date'})
        return attrs


class SpiritualExerciseListSerializer(serializers.ModelSerializer):
    """Card fields for the public list"""
    locale = serializers.SerializerMethodField()

    class Meta:
        model = SpiritualExercise
        fields = ['id', 'title', 'slug', 'description', 'image_url', 'home_image_url', 'start_date', 'end_date',
                  'location_name', 'location_city', 'location_country', 'leader_name', 'max_capacity', 'locale']

    def get_locale(self, obj):
        if obj.locale is None:
            return None
        return {'id': obj.locale.id, 'code': obj.locale.code, 'native_name': obj.locale.native_name}


def exercise_detail_data(exercise, public=True):
    """
    Exercise with its related items, each list in display order. The public
    view hides invisible testimonials and gallery images and inactive forms.
    """
    testimonials = exercise.testimonials.all()
    gallery = exercise.gallery.all()
    forms = exercise.forms.all()
    if public:
        testimonials = [item for item in testimonials if item.is_visible]
        gallery = [item for item in gallery if item.is_visible]
        forms = [item for item in forms if item.is_active]

    data = SpiritualExerciseSerializer(exercise).data
    data['pricing'] = ExercisePricingSerializer(exercise.pricing.all(), many=True).data
    data['testimonials'] = ExerciseTestimonialSerializer(testimonials, many=True).data
    data['gallery'] = ExerciseGalleryImageSerializer(gallery, many=True).data
    data['forms'] = ExerciseFormSerializer(forms, many=True).data
    return data
