# Generated manually
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('i18n', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='LectioSource',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('lang', models.CharField(default='sk', max_length=5)),
                ('book', models.CharField(blank=True, max_length=100)),
                ('chapter', models.CharField(blank=True, max_length=20)),
                ('chapter_key', models.CharField(help_text='Key referenced by liturgical calendar days', max_length=100)),
                ('scripture_reference', models.CharField(blank=True, max_length=255)),
                ('cycle', models.CharField(choices=[('A', 'Year A'), ('B', 'Year B'), ('C', 'Year C'), ('N', 'Weekday')], default='N', max_length=1)),
                ('id_number', models.IntegerField(blank=True, null=True)),
                ('intro', models.TextField(blank=True)),
                ('intro_audio', models.CharField(blank=True, max_length=500)),
                ('opening_prayer', models.TextField(blank=True)),
                ('opening_prayer_audio', models.CharField(blank=True, max_length=500)),
                ('bible_1_title', models.CharField(blank=True, max_length=255)),
                ('bible_1', models.TextField(blank=True)),
                ('bible_1_audio', models.CharField(blank=True, max_length=500)),
                ('bible_2_title', models.CharField(blank=True, max_length=255)),
                ('bible_2', models.TextField(blank=True)),
                ('bible_2_audio', models.CharField(blank=True, max_length=500)),
                ('bible_3_title', models.CharField(blank=True, max_length=255)),
                ('bible_3', models.TextField(blank=True)),
                ('bible_3_audio', models.CharField(blank=True, max_length=500)),
                ('lectio_text', models.TextField(blank=True)),
                ('lectio_audio', models.CharField(blank=True, max_length=500)),
                ('meditatio_text', models.TextField(blank=True)),
                ('meditatio_audio', models.CharField(blank=True, max_length=500)),
                ('oratio_text', models.TextField(blank=True)),
                ('oratio_audio', models.CharField(blank=True, max_length=500)),
                ('contemplatio_text', models.TextField(blank=True)),
                ('contemplatio_audio', models.CharField(blank=True, max_length=500)),
                ('actio_text', models.TextField(blank=True)),
                ('actio_audio', models.CharField(blank=True, max_length=500)),
                ('closing_prayer', models.TextField(blank=True)),
                ('blessing', models.TextField(blank=True)),
                ('video_url', models.CharField(blank=True, max_length=500)),
                ('audio_5_min', models.CharField(blank=True, max_length=500)),
                ('reference', models.TextField(blank=True)),
                ('source_material', models.TextField(blank=True)),
                ('checked', models.BooleanField(default=False, help_text='Reviewed and approved for the daily preview')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('locale', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='lectio_sources', to='i18n.locale')),
            ],
            options={
                'db_table': 'lectio_sources',
                'ordering': ['chapter_key', 'lang', 'cycle'],
                'unique_together': {('chapter_key', 'lang', 'cycle')},
                'indexes': [models.Index(fields=['chapter_key', 'lang'], name='lectio_src_key_lang_idx')],
            },
        ),
    ]
