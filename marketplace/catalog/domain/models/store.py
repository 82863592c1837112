import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Store(models.Model):
    """
    A seller's shop.

    The ``default_*`` shipping fields are the fallback tier used whenever the store
    has no ShippingRate for the destination country, or a rate leaves a field empty.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    url = models.SlugField(max_length=200, unique=True)
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)

    # Default shipping details
    default_shipping_service = models.CharField(max_length=150, default="International Delivery")
    default_shipping_fee_per_item = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0"), validators=[MinValueValidator(0)]
    )
    default_shipping_fee_for_additional_item = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0"), validators=[MinValueValidator(0)]
    )
    default_shipping_fee_per_kg = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0"), validators=[MinValueValidator(0)]
    )
    default_shipping_fee_fixed = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0"), validators=[MinValueValidator(0)]
    )
    default_delivery_time_min = models.PositiveIntegerField(default=7, help_text="Days")
    default_delivery_time_max = models.PositiveIntegerField(default=31, help_text="Days")
    return_policy = models.TextField(default="Return in 30 days.")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        app_label = "marketplace"

    def __str__(self):
        return self.name
