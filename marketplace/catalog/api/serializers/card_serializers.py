"""
Product card serializers.

CatalogService already projects products into plain dicts; these serializers
render them (Decimal prices as strings) and document the response shape.
"""

from rest_framework import serializers


class CardImageSerializer(serializers.Serializer):
    url = serializers.CharField()
    alt = serializers.CharField(allow_blank=True)


class CardSizeSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    size = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    discount = serializers.DecimalField(max_digits=5, decimal_places=2)
    quantity = serializers.IntegerField()


class CardVariantSerializer(serializers.Serializer):
    variant_id = serializers.CharField()
    variant_slug = serializers.CharField()
    variant_name = serializers.CharField()
    images = CardImageSerializer(many=True)
    sizes = CardSizeSerializer(many=True)
    colors = serializers.ListField(child=serializers.CharField())


class VariantImageLinkSerializer(serializers.Serializer):
    """Storefront link of a variant with its lead image."""

    url = serializers.CharField()
    image = serializers.CharField(allow_null=True)


class ProductCardSerializer(serializers.Serializer):
    id = serializers.CharField()
    slug = serializers.CharField()
    name = serializers.CharField()
    rating = serializers.FloatField()
    sales = serializers.IntegerField()
    num_reviews = serializers.IntegerField()
    min_price = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    variants = CardVariantSerializer(many=True)
    variant_images = VariantImageLinkSerializer(many=True)


class ProductCardPageSerializer(serializers.Serializer):
    """Paginated browse response."""

    products = ProductCardSerializer(many=True)
    total_pages = serializers.IntegerField()
    current_page = serializers.IntegerField()
    page_size = serializers.IntegerField()
    total_count = serializers.IntegerField()
