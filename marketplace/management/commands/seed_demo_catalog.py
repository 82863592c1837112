import logging
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from marketplace.models import Category, Country, Product, ShippingRate, Store, SubCategory


logger = logging.getLogger(__name__)

DEMO_IMAGE = "https://res.cloudinary.com/demo/image/upload/v1312461204/sample.jpg"

CATEGORIES = [
    {"name": "Electronics", "url": "electronics", "featured": True},
    {"name": "Fashion", "url": "fashion", "featured": True},
    {"name": "Home & Garden", "url": "home-garden", "featured": False},
]

# (name, url, category url)
SUB_CATEGORIES = [
    ("Smartphones", "smartphones", "electronics"),
    ("Laptops", "laptops", "electronics"),
    ("Men's Clothing", "mens-clothing", "fashion"),
]


class Command(BaseCommand):
    help = "Seeds a demo catalog: categories, a store, a product and a US shipping rate."

    def handle(self, *args, **options):
        self.stdout.write(self.style.SUCCESS("Seeding demo catalog..."))

        with transaction.atomic():
            categories = self._seed_categories()
            sub_categories = self._seed_sub_categories(categories)
            store = self._seed_store()
            self._seed_product(store, categories["electronics"], sub_categories["smartphones"])
            self._seed_shipping(store)

        logger.info("Demo catalog seeded")
        self.stdout.write(self.style.SUCCESS("Demo catalog seeding complete."))

    def _seed_categories(self):
        categories = {}
        for data in CATEGORIES:
            category, created = Category.objects.get_or_create(
                url=data["url"],
                defaults={"name": data["name"], "image": DEMO_IMAGE, "featured": data["featured"]},
            )
            self._report("category", category.name, created)
            categories[category.url] = category
        return categories

    def _seed_sub_categories(self, categories):
        sub_categories = {}
        for name, url, category_url in SUB_CATEGORIES:
            sub_category, created = SubCategory.objects.get_or_create(
                url=url,
                defaults={"name": name, "image": DEMO_IMAGE, "featured": True, "category": categories[category_url]},
            )
            self._report("sub category", sub_category.name, created)
            sub_categories[url] = sub_category
        return sub_categories

    def _seed_store(self):
        store, created = Store.objects.get_or_create(
            url="demo-electronics",
            defaults={
                "name": "Demo Electronics Store",
                "description": "This is a demo store for testing purposes",
            },
        )
        self._report("store", store.name, created)
        return store

    def _seed_product(self, store, category, sub_category):
        if Product.objects.filter(slug="demo-smartphone").exists():
            self._report("product", "Demo Smartphone", False)
            return

        product = Product.objects.create(
            name="Demo Smartphone",
            slug="demo-smartphone",
            description="This is a demo smartphone for testing purposes",
            brand="Demo Brand",
            store=store,
            category=category,
            sub_category=sub_category,
        )
        variant = product.variants.create(
            variant_name="Demo Variant",
            variant_description="Demo variant description",
            variant_image=DEMO_IMAGE,
            slug="demo-smartphone-variant",
            sku="DEMO-SKU-001",
            keywords="demo, smartphone, test",
            weight=Decimal("0.5"),
        )
        variant.sizes.create(size="128GB", quantity=100, price=Decimal("999.99"), discount=Decimal("10"))
        variant.colors.create(name="Black")
        variant.images.create(url=DEMO_IMAGE, alt="Demo Smartphone Image")
        self._report("product", product.name, True)

    def _seed_shipping(self, store):
        country, created = Country.objects.get_or_create(name="United States", code="US")
        self._report("country", country.name, created)

        ShippingRate.objects.get_or_create(
            store=store,
            country=country,
            defaults={
                "shipping_service": "Standard Shipping",
                "shipping_fee_per_item": Decimal("5.99"),
                "shipping_fee_for_additional_item": Decimal("2.99"),
                "shipping_fee_per_kg": Decimal("1.99"),
                "shipping_fee_fixed": Decimal("0"),
                "delivery_time_min": 3,
                "delivery_time_max": 7,
                "return_policy": "30 days return policy",
            },
        )

    def _report(self, kind, name, created):
        if created:
            self.stdout.write(self.style.SUCCESS(f"Created {kind}: {name}"))
        else:
            self.stdout.write(self.style.WARNING(f"{kind.capitalize()} already exists: {name}"))
