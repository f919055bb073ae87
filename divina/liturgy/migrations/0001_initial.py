# Generated manually
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='LiturgicalYear',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('year', models.IntegerField()),
                ('locale_code', models.CharField(default='sk', max_length=10)),
                ('lectionary_cycle', models.CharField(choices=[('A', 'Year A'), ('B', 'Year B'), ('C', 'Year C')], max_length=1)),
                ('ferial_lectionary', models.PositiveSmallIntegerField(choices=[(1, 'Year I'), (2, 'Year II')])),
                ('start_date', models.DateField(blank=True, null=True)),
                ('end_date', models.DateField(blank=True, null=True)),
                ('is_generated', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'liturgical_years',
                'ordering': ['-year', 'locale_code'],
                'unique_together': {('year', 'locale_code')},
            },
        ),
        migrations.CreateModel(
            name='LiturgicalCalendarDay',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField()),
                ('locale_code', models.CharField(default='sk', max_length=10)),
                ('season', models.CharField(blank=True, max_length=50)),
                ('season_week', models.IntegerField(blank=True, null=True)),
                ('weekday', models.CharField(blank=True, max_length=20)),
                ('celebration_title', models.CharField(blank=True, max_length=255)),
                ('celebration_rank', models.CharField(blank=True, max_length=255)),
                ('celebration_rank_num', models.FloatField(blank=True, null=True)),
                ('celebration_colour', models.CharField(blank=True, max_length=20)),
                ('alternative_celebration_title', models.CharField(blank=True, max_length=255, null=True)),
                ('alternative_celebration_rank', models.CharField(blank=True, max_length=255, null=True)),
                ('alternative_celebration_rank_num', models.FloatField(blank=True, null=True)),
                ('alternative_celebration_colour', models.CharField(blank=True, max_length=20, null=True)),
                ('lectio_key', models.CharField(blank=True, help_text='Chapter key linking the day to its lectio sources', max_length=100, null=True)),
                ('name_days', models.CharField(blank=True, max_length=255, null=True)),
                ('source_api', models.CharField(blank=True, max_length=100)),
                ('is_custom_edit', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('liturgical_year', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='days', to='liturgy.liturgicalyear')),
            ],
            options={
                'db_table': 'liturgical_calendar',
                'ordering': ['date', 'locale_code'],
                'unique_together': {('date', 'locale_code')},
                'indexes': [
                    models.Index(fields=['date'], name='liturgical_cal_date_idx'),
                    models.Index(fields=['lectio_key'], name='liturgical_cal_key_idx'),
                ],
            },
        ),
    ]
