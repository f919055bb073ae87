import django_filters
from django.db.models import Q
from .models import Article


class ArticleFilter(django_filters.FilterSet):
    """Article filters; ``search`` matches title, excerpt and content"""
    search = django_filters.CharFilter(method='filter_search', label='Search')
    category = django_filters.NumberFilter(field_name='category_id')
    author = django_filters.NumberFilter(field_name='author_id')
    lang = django_filters.CharFilter(field_name='lang')
    status = django_filters.ChoiceFilter(field_name='status', choices=Article.STATUS_CHOICES)
    tag = django_filters.CharFilter(method='filter_tag', label='Tag')

    class Meta:
        model = Article
        fields = ['search', 'category', 'author', 'lang', 'status', 'tag']

    def filter_search(self, queryset, name, value):
        value = value.strip() if value else ''
        if not value:
            return queryset
        return queryset.filter(
            Q(title__icontains=value) |
            Q(excerpt__icontains=value) |
            Q(content__icontains=value)
        )

    def filter_tag(self, queryset, name, value):
        # JSON containment is not portable across backends
        value = value.strip() if value else ''
        if not value:
            return queryset
        ids = [article_id for article_id, tags in queryset.values_list('id', 'tags') if value in (tags or [])]
        return queryset.filter(id__in=ids)
