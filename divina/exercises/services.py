import logging
from django.db import transaction
from divina.core.utils import unique_slug
from .models import SpiritualExercise, ExercisePricing, ExerciseTestimonial, ExerciseGalleryImage

logger = logging.getLogger(__name__)

COPY_SUFFIX = ' (kópia)'

COPIED_FIELDS = [
    'description', 'full_description', 'image_url', 'home_image_url', 'start_date', 'end_date',
    'location_name', 'location_address', 'location_city', 'location_country', 'locale_id',
    'leader_name', 'leader_bio', 'leader_photo', 'max_capacity', 'is_active',
]


@transaction.atomic
def duplicate_exercise(exercise, user=None):
    """
    Copy an exercise as an unpublished draft together with its pricing,
    testimonials and gallery. Registration forms are not copied.
    """
    copy = SpiritualExercise(
        title=f"{exercise.title}{COPY_SUFFIX}",
        slug=unique_slug(SpiritualExercise, f"{exercise.slug}-copy"),
        is_published=False,
        created_by=user,
        **{field: getattr(exercise, field) for field in COPIED_FIELDS},
    )
    copy.save()

    ExercisePricing.objects.bulk_create([
        ExercisePricing(exercise=copy, room_type=item.room_type, price=item.price, deposit=item.deposit,
                        description=item.description, display_order=item.display_order)
        for item in exercise.pricing.all()
    ])
    ExerciseTestimonial.objects.bulk_create([
        ExerciseTestimonial(exercise=copy, author_name=item.author_name, testimonial_text=item.testimonial_text,
                            rating=item.rating, display_order=item.display_order, is_visible=item.is_visible)
        for item in exercise.testimonials.all()
    ])
    ExerciseGalleryImage.objects.bulk_create([
        ExerciseGalleryImage(exercise=copy, image_url=item.image_url, caption=item.caption,
                             alt_text=item.alt_text, display_order=item.display_order,
                             is_visible=item.is_visible)
        for item in exercise.gallery.all()
    ])
    logger.info(f"Spiritual exercise {exercise.id} duplicated as {copy.id}")
    return copy
