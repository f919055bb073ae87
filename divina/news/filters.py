import django_filters
from django.db.models import Q
from .models import News


class NewsFilter(django_filters.FilterSet):
    """
    Public news filters. A global ``search`` matches title, summary and
    content and replaces every individual filter.
    """
    search = django_filters.CharFilter(method='filter_search', label='Search')
    title = django_filters.CharFilter(field_name='title', lookup_expr='icontains')
    summary = django_filters.CharFilter(field_name='summary', lookup_expr='icontains')
    content = django_filters.CharFilter(field_name='content', lookup_expr='icontains')
    dateFrom = django_filters.DateFilter(field_name='published_at', lookup_expr='date__gte')
    dateTo = django_filters.DateFilter(field_name='published_at', lookup_expr='date__lte')

    INDIVIDUAL_FILTERS = ['title', 'summary', 'content', 'dateFrom', 'dateTo']

    class Meta:
        model = News
        fields = ['search', 'title', 'summary', 'content', 'dateFrom', 'dateTo']

    def filter_queryset(self, queryset):
        if (self.form.cleaned_data.get('search') or '').strip():
            for name in self.INDIVIDUAL_FILTERS:
                self.form.cleaned_data[name] = None
        return super().filter_queryset(queryset)

    def filter_search(self, queryset, name, value):
        value = value.strip() if value else ''
        if not value:
            return queryset
        return queryset.filter(
            Q(title__icontains=value) |
            Q(summary__icontains=value) |
            Q(content__icontains=value)
        )
