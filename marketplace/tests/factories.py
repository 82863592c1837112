import random
from decimal import Decimal

import factory
from django.utils.text import slugify
from faker import Faker

from marketplace.models import (
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

fake = Faker()


class StoreFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Store

    name = factory.Sequence(lambda n: f"Store {n}")
    url = factory.LazyAttribute(lambda o: slugify(o.name))
    description = factory.Faker("sentence", nb_words=8)
    default_shipping_fee_per_item = Decimal("0")
    default_shipping_fee_for_additional_item = Decimal("0")
    default_shipping_fee_per_kg = Decimal("0")
    default_shipping_fee_fixed = Decimal("0")


class CategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")
    url = factory.LazyAttribute(lambda o: slugify(o.name))
    image = factory.Faker("image_url")


class SubCategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = SubCategory

    name = factory.Sequence(lambda n: f"Sub Category {n}")
    url = factory.LazyAttribute(lambda o: slugify(o.name))
    category = factory.SubFactory(CategoryFactory)


class OfferTagFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = OfferTag

    name = factory.Sequence(lambda n: f"Offer {n}")
    url = factory.LazyAttribute(lambda o: slugify(o.name))


class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product

    name = factory.Sequence(lambda n: f"Product {n}")
    description = factory.Faker("paragraph", nb_sentences=3)
    brand = factory.Faker("company")
    store = factory.SubFactory(StoreFactory)
    sub_category = factory.SubFactory(SubCategoryFactory)
    category = factory.LazyAttribute(lambda o: o.sub_category.category)
    views = factory.LazyFunction(lambda: random.randint(0, 1000))
    rating = 0
    sales = 0
    num_reviews = 0


class ProductVariantFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductVariant

    product = factory.SubFactory(ProductFactory)
    variant_name = factory.Sequence(lambda n: f"Variant {n}")
    variant_description = factory.Faker("sentence", nb_words=6)
    sku = factory.Sequence(lambda n: f"SKU-{n:05d}")
    weight = Decimal("0.500")


class SizeFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Size

    variant = factory.SubFactory(ProductVariantFactory)
    size = "M"
    price = Decimal("10.00")
    discount = Decimal("0")
    quantity = factory.Faker("random_int", min=1, max=100)


class ColorFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Color

    variant = factory.SubFactory(ProductVariantFactory)
    name = factory.Faker("color_name")


class VariantImageFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = VariantImage

    variant = factory.SubFactory(ProductVariantFactory)
    url = factory.Faker("image_url")
    alt = factory.Faker("sentence", nb_words=3)


class CountryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Country

    name = factory.Sequence(lambda n: f"Country {n}")
    # user-assigned ISO range
    code = factory.Sequence(lambda n: f"Q{chr(65 + n % 26)}")


class ShippingRateFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ShippingRate

    store = factory.SubFactory(StoreFactory)
    country = factory.SubFactory(CountryFactory)


class FreeShippingFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = FreeShipping

    product = factory.SubFactory(ProductFactory)

    @factory.post_generation
    def eligible_countries(self, create, extracted, **kwargs):
        if not create or not extracted:
            return
        self.eligible_countries.add(*extracted)
