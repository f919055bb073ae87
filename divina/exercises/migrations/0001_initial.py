# Generated manually
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('i18n', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='SpiritualExercise',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('slug', models.SlugField(blank=True, max_length=255, unique=True)),
                ('description', models.TextField(blank=True)),
                ('full_description', models.TextField(blank=True)),
                ('image_url', models.CharField(blank=True, max_length=500)),
                ('home_image_url', models.CharField(blank=True, max_length=500)),
                ('start_date', models.DateTimeField()),
                ('end_date', models.DateTimeField()),
                ('location_name', models.CharField(max_length=255)),
                ('location_address', models.CharField(blank=True, max_length=255)),
                ('location_city', models.CharField(blank=True, max_length=100)),
                ('location_country', models.CharField(default='Slovensko', max_length=100)),
                ('leader_name', models.CharField(blank=True, max_length=255)),
                ('leader_bio', models.TextField(blank=True)),
                ('leader_photo', models.CharField(blank=True, max_length=500)),
                ('max_capacity', models.PositiveIntegerField(blank=True, null=True)),
                ('is_published', models.BooleanField(default=False)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='spiritual_exercises', to=settings.AUTH_USER_MODEL)),
                ('locale', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='spiritual_exercises', to='i18n.locale')),
            ],
            options={
                'db_table': 'spiritual_exercises',
                'ordering': ['start_date', 'id'],
                'indexes': [models.Index(fields=['is_published', 'is_active', 'start_date'], name='exercises_public_idx')],
            },
        ),
        migrations.CreateModel(
            name='ExercisePricing',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('room_type', models.CharField(max_length=255)),
                ('price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(0)])),
                ('deposit', models.DecimalField(decimal_places=2, default=0, max_digits=10, validators=[django.core.validators.MinValueValidator(0)])),
                ('description', models.TextField(blank=True)),
                ('display_order', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('exercise', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='pricing', to='exercises.spiritualexercise')),
            ],
            options={
                'db_table': 'spiritual_exercises_pricing',
                'ordering': ['exercise_id', 'display_order', 'id'],
            },
        ),
        migrations.CreateModel(
            name='ExerciseTestimonial',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('author_name', models.CharField(max_length=255)),
                ('testimonial_text', models.TextField()),
                ('rating', models.PositiveSmallIntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)])),
                ('display_order', models.IntegerField(default=0)),
                ('is_visible', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('exercise', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='testimonials', to='exercises.spiritualexercise')),
            ],
            options={
                'db_table': 'spiritual_exercises_testimonials',
                'ordering': ['exercise_id', 'display_order', 'id'],
            },
        ),
        migrations.CreateModel(
            name='ExerciseGalleryImage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('image_url', models.CharField(max_length=500)),
                ('caption', models.CharField(blank=True, max_length=255)),
                ('alt_text', models.CharField(blank=True, max_length=255)),
                ('display_order', models.IntegerField(default=0)),
                ('is_visible', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('exercise', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='gallery', to='exercises.spiritualexercise')),
            ],
            options={
                'db_table': 'spiritual_exercises_gallery',
                'ordering': ['exercise_id', 'display_order', 'id'],
            },
        ),
        migrations.CreateModel(
            name='ExerciseForm',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('form_id', models.CharField(max_length=100)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('exercise', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='forms', to='exercises.spiritualexercise')),
            ],
            options={
                'db_table': 'spiritual_exercises_forms',
                'ordering': ['exercise_id', 'id'],
            },
        ),
    ]
