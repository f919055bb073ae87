# Generated manually
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ProgramCategory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('slug', models.SlugField(blank=True, max_length=255, unique=True)),
                ('description', models.TextField(blank=True)),
                ('color', models.CharField(blank=True, max_length=20)),
                ('icon', models.CharField(blank=True, max_length=50)),
                ('display_order', models.IntegerField(default=0)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'program_categories',
                'ordering': ['display_order', 'name'],
                'verbose_name_plural': 'Program categories',
            },
        ),
        migrations.CreateModel(
            name='Program',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('slug', models.SlugField(blank=True, max_length=255)),
                ('description', models.TextField(blank=True)),
                ('image_url', models.CharField(blank=True, max_length=500)),
                ('author', models.CharField(blank=True, max_length=255)),
                ('lang', models.CharField(default='sk', max_length=5)),
                ('total_sessions', models.IntegerField(default=0)),
                ('total_duration_minutes', models.IntegerField(default=0)),
                ('is_featured', models.BooleanField(default=False)),
                ('is_published', models.BooleanField(default=False)),
                ('display_order', models.IntegerField(default=0)),
                ('published_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='programs', to='programs.programcategory')),
            ],
            options={
                'db_table': 'programs',
                'ordering': ['-is_featured', 'display_order', 'title'],
                'indexes': [
                    models.Index(fields=['slug', 'lang'], name='programs_slug_lang_idx'),
                    models.Index(fields=['is_published', 'lang'], name='programs_pub_lang_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ProgramSession',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True)),
                ('session_order', models.IntegerField()),
                ('duration_minutes', models.FloatField(default=0)),
                ('is_published', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('program', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sessions', to='programs.program')),
            ],
            options={
                'db_table': 'program_sessions',
                'ordering': ['program_id', 'session_order'],
                'unique_together': {('program', 'session_order')},
            },
        ),
        migrations.CreateModel(
            name='SessionMedia',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('media_type', models.CharField(choices=[('video', 'Video'), ('audio', 'Audio'), ('text', 'Text/HTML'), ('image', 'Image')], default='text', max_length=10)),
                ('title', models.CharField(blank=True, max_length=255)),
                ('content', models.TextField(help_text='HTML for text media, URL otherwise')),
                ('media_order', models.IntegerField()),
                ('duration_minutes', models.FloatField(blank=True, null=True)),
                ('thumbnail_url', models.CharField(blank=True, max_length=500)),
                ('file_size_mb', models.FloatField(blank=True, null=True)),
                ('is_published', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('session', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='media', to='programs.programsession')),
            ],
            options={
                'db_table': 'session_media',
                'ordering': ['session_id', 'media_order'],
                'verbose_name_plural': 'Session media',
                'unique_together': {('session', 'media_order')},
            },
        ),
    ]
