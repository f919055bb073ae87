from django.db import transaction
from rest_framework import serializers
from .models import ArticleCategory, Article, ArticleBlock


class ArticleCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = ArticleCategory
        fields = ['id', 'name', 'slug', 'description', 'color', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Name is required')
        return value


class ArticleBlockSerializer(serializers.ModelSerializer):
    class Meta:
        model = ArticleBlock
        fields = ['id', 'block_type', 'data', 'position']
        read_only_fields = ['position']

    def validate_data(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError('Block data must be an object')
        return value


class ArticleSerializer(serializers.ModelSerializer):
    """Article without its blocks, used for lists"""
    author_name = serializers.SerializerMethodField()
    category_detail = serializers.SerializerMethodField()

    class Meta:
        model = Article
        fields = ['id', 'title', 'slug', 'excerpt', 'content', 'featured_image', 'status', 'lang', 'author',
                  'author_name', 'category', 'category_detail', 'tags', 'seo_title', 'seo_description',
                  'view_count', 'like_count', 'published_at', 'created_at', 'updated_at']
        read_only_fields = ['author', 'view_count', 'like_count', 'created_at', 'updated_at']

    def get_author_name(self, obj):
        if obj.author is None:
            return None
        return obj.author.get_full_name() or obj.author.username

    def get_category_detail(self, obj):
        if obj.category is None:
            return None
        return {'id': obj.category.id, 'name': obj.category.name, 'slug': obj.category.slug,
                'color': obj.category.color}

    def validate_title(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Title is required')
        return value

    def validate_tags(self, value):
        if not isinstance(value, list) or not all(isinstance(tag, str) for tag in value):
            raise serializers.ValidationError('Tags must be a list of strings')
        tags = []
        for tag in value:
            tag = tag.strip()
            if tag and tag not in tags:
                tags.append(tag)
        return tags


class ArticleDetailSerializer(ArticleSerializer):
    """
    Article with its blocks. A ``blocks`` list in the payload replaces every
    existing block; positions follow the list order.
    """
    blocks = ArticleBlockSerializer(many=True, required=False)

    class Meta(ArticleSerializer.Meta):
        fields = ArticleSerializer.Meta.fields + ['blocks']

    def create(self, validated_data):
        blocks = validated_data.pop('blocks', [])
        with transaction.atomic():
            article = Article.objects.create(**validated_data)
            self._write_blocks(article, blocks)
        return article

    def update(self, instance, validated_data):
        blocks = validated_data.pop('blocks', None)
        with transaction.atomic():
            article = super().update(instance, validated_data)
            if blocks is not None:
                article.blocks.all().delete()
                self._write_blocks(article, blocks)
        return article

    def _write_blocks(self, article, blocks):
        ArticleBlock.objects.bulk_create([
            ArticleBlock(article=article, block_type=block['block_type'], data=block.get('data', {}),
                         position=position)
            for position, block in enumerate(blocks)
        ])
