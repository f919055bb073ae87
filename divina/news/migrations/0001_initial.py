# Generated manually
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='News',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('summary', models.TextField(blank=True)),
                ('image_url', models.CharField(blank=True, max_length=500)),
                ('content', models.TextField(blank=True)),
                ('audio_url', models.CharField(blank=True, max_length=500)),
                ('lang', models.CharField(default='sk', max_length=5)),
                ('published_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'news',
                'ordering': ['-published_at', '-id'],
                'verbose_name_plural': 'News',
                'indexes': [models.Index(fields=['lang', '-published_at'], name='news_lang_published_idx')],
            },
        ),
    ]
