import uuid
from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from marketplace.shipping.domain.methods import ITEM, SHIPPING_FEE_METHOD_CHOICES
from utils.slugs import generate_unique_slug

from .store import Store
from .taxonomy import Category, OfferTag, SubCategory


class Product(models.Model):
    # Basic Information
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True, blank=True)
    description = models.TextField()
    brand = models.CharField(max_length=100, blank=True)

    # Ownership and taxonomy
    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name="products")
    category = models.ForeignKey(Category, on_delete=models.CASCADE, related_name="products")
    sub_category = models.ForeignKey(SubCategory, on_delete=models.CASCADE, related_name="products")
    offer_tag = models.ForeignKey(
        OfferTag, on_delete=models.SET_NULL, null=True, blank=True, related_name="products"
    )

    # Shipping
    shipping_fee_method = models.CharField(max_length=10, choices=SHIPPING_FEE_METHOD_CHOICES, default=ITEM)
    free_shipping_for_all_countries = models.BooleanField(default=False)

    # Metrics
    views = models.PositiveIntegerField(default=0)
    rating = models.FloatField(default=0, validators=[MinValueValidator(0), MaxValueValidator(5)])
    sales = models.PositiveIntegerField(default=0)
    num_reviews = models.PositiveIntegerField(default=0)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["-created_at"], name="product_created_idx"),
            models.Index(fields=["-views"], name="product_views_idx"),
            models.Index(fields=["-rating"], name="product_rating_idx"),
            models.Index(fields=["category", "-created_at"], name="product_category_created_idx"),
            models.Index(fields=["store", "-created_at"], name="product_store_created_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = generate_unique_slug(self.name, Product, instance_pk=self.pk)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name


class ProductVariant(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="variants")
    variant_name = models.CharField(max_length=200)
    variant_description = models.TextField(blank=True)
    variant_image = models.URLField(max_length=500, blank=True)
    slug = models.SlugField(max_length=220, unique=True, blank=True)
    sku = models.CharField(max_length=100, blank=True)
    weight = models.DecimalField(
        max_digits=8,
        decimal_places=3,
        default=Decimal("0"),
        validators=[MinValueValidator(0)],
        help_text="Weight in kg",
    )
    keywords = models.CharField(max_length=500, blank=True)
    is_sale = models.BooleanField(default=False)
    sale_end_date = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        app_label = "marketplace"

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = generate_unique_slug(self.variant_name, ProductVariant, instance_pk=self.pk)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.product.name} - {self.variant_name}"


class VariantImage(models.Model):
    variant = models.ForeignKey(ProductVariant, on_delete=models.CASCADE, related_name="images")
    url = models.URLField(max_length=500)
    alt = models.CharField(max_length=200, blank=True)
    order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["order", "id"]
        app_label = "marketplace"

    def __str__(self):
        return f"Image for {self.variant.variant_name}"


class Color(models.Model):
    variant = models.ForeignKey(ProductVariant, on_delete=models.CASCADE, related_name="colors")
    name = models.CharField(max_length=50)

    class Meta:
        ordering = ["id"]
        app_label = "marketplace"

    def __str__(self):
        return self.name


class Size(models.Model):
    """A stock-keeping unit of a variant. The discounted price is derived, never stored."""

    variant = models.ForeignKey(ProductVariant, on_delete=models.CASCADE, related_name="sizes")
    size = models.CharField(max_length=50)
    price = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))]
    )
    quantity = models.PositiveIntegerField(default=0)
    discount = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        help_text="Percentage discount (0-100)",
    )

    class Meta:
        ordering = ["id"]
        app_label = "marketplace"
        constraints = [
            models.CheckConstraint(condition=models.Q(price__gt=0), name="size_price_positive"),
            models.CheckConstraint(
                condition=models.Q(discount__gte=0) & models.Q(discount__lte=100), name="size_discount_percentage"
            ),
        ]

    def __str__(self):
        return f"{self.variant.variant_name} / {self.size}"
