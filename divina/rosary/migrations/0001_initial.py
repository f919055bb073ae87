# Generated manually
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='RosaryDecade',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('lang', models.CharField(default='sk', max_length=5)),
                ('category', models.CharField(choices=[('joyful', 'Joyful Mysteries'), ('luminous', 'Luminous Mysteries'), ('sorrowful', 'Sorrowful Mysteries'), ('glorious', 'Glorious Mysteries')], max_length=20)),
                ('title', models.CharField(max_length=255)),
                ('bible_text', models.TextField(blank=True)),
                ('intro', models.TextField(blank=True)),
                ('intro_audio', models.CharField(blank=True, max_length=500)),
                ('illustration_url', models.CharField(blank=True, max_length=500)),
                ('opening_prayers', models.TextField(blank=True)),
                ('opening_prayers_audio', models.CharField(blank=True, max_length=500)),
                ('lectio_text', models.TextField(blank=True)),
                ('lectio_audio', models.CharField(blank=True, max_length=500)),
                ('commentary', models.TextField(blank=True)),
                ('commentary_audio', models.CharField(blank=True, max_length=500)),
                ('meditatio_text', models.TextField(blank=True)),
                ('meditatio_audio', models.CharField(blank=True, max_length=500)),
                ('oratio_html', models.TextField(blank=True)),
                ('oratio_audio', models.CharField(blank=True, max_length=500)),
                ('contemplatio_text', models.TextField(blank=True)),
                ('contemplatio_audio', models.CharField(blank=True, max_length=500)),
                ('actio_text', models.TextField(blank=True)),
                ('actio_audio', models.CharField(blank=True, max_length=500)),
                ('recording_audio', models.CharField(blank=True, help_text='Complete recording of the decade', max_length=500)),
                ('author', models.CharField(blank=True, max_length=255)),
                ('is_published', models.BooleanField(default=False)),
                ('order', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'rosary_decades',
                'ordering': ['category', 'lang', 'order', 'id'],
                'indexes': [models.Index(fields=['category', 'lang', 'order'], name='rosary_cat_lang_order_idx')],
            },
        ),
    ]
