import django_filters
from django.db.models import Q
from .models import LectioSource


class LectioSourceFilter(django_filters.FilterSet):
    """Filters for the lectio source lists"""
    lang = django_filters.CharFilter(field_name='lang', lookup_expr='exact')
    chapter_key = django_filters.CharFilter(field_name='chapter_key', lookup_expr='iexact')
    cycle = django_filters.CharFilter(method='filter_cycle', label='Cycle')
    checked = django_filters.BooleanFilter(field_name='checked')
    search = django_filters.CharFilter(method='filter_search', label='Search')

    class Meta:
        model = LectioSource
        fields = ['lang', 'chapter_key', 'cycle', 'checked', 'search']

    def filter_cycle(self, queryset, name, value):
        return queryset.filter(cycle=value.strip().upper()) if value else queryset

    def filter_search(self, queryset, name, value):
        value = value.strip() if value else ''
        if not value:
            return queryset
        return queryset.filter(
            Q(chapter_key__icontains=value) |
            Q(scripture_reference__icontains=value) |
            Q(book__icontains=value)
        )
