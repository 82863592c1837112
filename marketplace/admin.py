from django.contrib import admin

from .models import (
    Category,
    Color,
    Country,
    FreeShipping,
    OfferTag,
    Product,
    ProductVariant,
    ShippingRate,
    Size,
    Store,
    SubCategory,
    VariantImage,
)


class SubCategoryInline(admin.TabularInline):
    model = SubCategory
    extra = 0
    fields = ("name", "url", "featured")


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "url", "featured", "created_at")
    list_filter = ("featured",)
    search_fields = ("name",)
    prepopulated_fields = {"url": ("name",)}
    inlines = [SubCategoryInline]


@admin.register(SubCategory)
class SubCategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "url", "category", "featured")
    list_filter = ("category", "featured")
    search_fields = ("name", "category__name")
    prepopulated_fields = {"url": ("name",)}


@admin.register(OfferTag)
class OfferTagAdmin(admin.ModelAdmin):
    list_display = ("name", "url")
    prepopulated_fields = {"url": ("name",)}


class ShippingRateInline(admin.TabularInline):
    model = ShippingRate
    extra = 0
    fields = (
        "country",
        "shipping_service",
        "shipping_fee_per_item",
        "shipping_fee_for_additional_item",
        "shipping_fee_per_kg",
        "shipping_fee_fixed",
        "delivery_time_min",
        "delivery_time_max",
    )


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ("name", "url", "is_active", "default_shipping_service", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "url")
    prepopulated_fields = {"url": ("name",)}
    inlines = [ShippingRateInline]

    fieldsets = (
        (None, {"fields": ("name", "url", "description", "is_active")}),
        (
            "Default shipping",
            {
                "fields": (
                    "default_shipping_service",
                    "default_shipping_fee_per_item",
                    "default_shipping_fee_for_additional_item",
                    "default_shipping_fee_per_kg",
                    "default_shipping_fee_fixed",
                    "default_delivery_time_min",
                    "default_delivery_time_max",
                    "return_policy",
                )
            },
        ),
    )


class SizeInline(admin.TabularInline):
    model = Size
    extra = 1
    fields = ("size", "price", "discount", "quantity")


class ColorInline(admin.TabularInline):
    model = Color
    extra = 0


class VariantImageInline(admin.TabularInline):
    model = VariantImage
    extra = 0
    fields = ("url", "alt", "order")


class ProductVariantInline(admin.StackedInline):
    model = ProductVariant
    extra = 0
    fields = ("variant_name", "variant_description", "variant_image", "sku", "weight", "is_sale")
    show_change_link = True


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "store", "category", "shipping_fee_method", "views", "rating", "sales", "created_at")
    list_filter = ("shipping_fee_method", "free_shipping_for_all_countries", "category", "store")
    search_fields = ("name", "description", "store__name")
    readonly_fields = ("id", "slug", "created_at", "updated_at")
    inlines = [ProductVariantInline]

    fieldsets = (
        ("Basic Information", {"fields": ("id", "name", "slug", "description", "brand")}),
        ("Store & Taxonomy", {"fields": ("store", "category", "sub_category", "offer_tag")}),
        ("Shipping", {"fields": ("shipping_fee_method", "free_shipping_for_all_countries")}),
        ("Metrics", {"fields": ("views", "rating", "sales", "num_reviews"), "classes": ("collapse",)}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("store", "category")


@admin.register(ProductVariant)
class ProductVariantAdmin(admin.ModelAdmin):
    list_display = ("variant_name", "product", "sku", "weight", "is_sale")
    search_fields = ("variant_name", "product__name", "sku")
    readonly_fields = ("slug",)
    inlines = [SizeInline, ColorInline, VariantImageInline]


@admin.register(Country)
class CountryAdmin(admin.ModelAdmin):
    list_display = ("name", "code")
    search_fields = ("name", "code")


@admin.register(ShippingRate)
class ShippingRateAdmin(admin.ModelAdmin):
    list_display = ("store", "country", "shipping_service", "shipping_fee_per_item", "shipping_fee_fixed")
    list_filter = ("country",)
    search_fields = ("store__name", "country__name")


@admin.register(FreeShipping)
class FreeShippingAdmin(admin.ModelAdmin):
    list_display = ("product", "created_at")
    filter_horizontal = ("eligible_countries",)
