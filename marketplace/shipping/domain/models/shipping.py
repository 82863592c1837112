import uuid

from django.core.validators import MinValueValidator
from django.db import models

from marketplace.catalog.domain.models.catalog import Product
from marketplace.catalog.domain.models.store import Store


class Country(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    code = models.CharField(max_length=2, help_text="ISO 3166-1 alpha-2 code")

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "Countries"
        app_label = "marketplace"
        constraints = [models.UniqueConstraint(fields=["name", "code"], name="unique_country_name_code")]

    def __str__(self):
        return f"{self.name} ({self.code})"


class ShippingRate(models.Model):
    """
    Per-country shipping override for a store.

    Every field is optional: an empty field defers to the store's default value.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name="shipping_rates")
    country = models.ForeignKey(Country, on_delete=models.CASCADE, related_name="shipping_rates")

    shipping_service = models.CharField(max_length=150, null=True, blank=True)
    shipping_fee_per_item = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True, validators=[MinValueValidator(0)]
    )
    shipping_fee_for_additional_item = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True, validators=[MinValueValidator(0)]
    )
    shipping_fee_per_kg = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True, validators=[MinValueValidator(0)]
    )
    shipping_fee_fixed = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True, validators=[MinValueValidator(0)]
    )
    delivery_time_min = models.PositiveIntegerField(null=True, blank=True, help_text="Days")
    delivery_time_max = models.PositiveIntegerField(null=True, blank=True, help_text="Days")
    return_policy = models.TextField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "marketplace"
        constraints = [models.UniqueConstraint(fields=["store", "country"], name="unique_store_country_rate")]

    def __str__(self):
        return f"{self.store.name} -> {self.country.code}"


class FreeShipping(models.Model):
    product = models.OneToOneField(Product, on_delete=models.CASCADE, related_name="free_shipping")
    eligible_countries = models.ManyToManyField(Country, blank=True, related_name="free_shipping_products")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "marketplace"

    def __str__(self):
        return f"Free shipping for {self.product.name}"
