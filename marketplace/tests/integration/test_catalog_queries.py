from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from marketplace.catalog.domain.models import Product
from marketplace.catalog.domain.repositories import DjangoCatalogRepository
from marketplace.catalog.domain.services import CatalogService, ProductFilterRequest
from marketplace.tests.factories import (
    CategoryFactory,
    ColorFactory,
    OfferTagFactory,
    ProductFactory,
    ProductVariantFactory,
    SizeFactory,
    StoreFactory,
    SubCategoryFactory,
)


class CatalogQueryIntegrationTest(TestCase):
    def setUp(self):
        self.service = CatalogService(repository=DjangoCatalogRepository())

        self.category = CategoryFactory(name="Fashion", url="fashion")
        self.sub_category = SubCategoryFactory(name="Shirts", url="shirts", category=self.category)
        self.store = StoreFactory(name="Demo Store", url="demo-store")

    def make_product(self, name, **kwargs):
        kwargs.setdefault("store", self.store)
        kwargs.setdefault("sub_category", self.sub_category)
        kwargs.setdefault("category", self.category)
        return ProductFactory(name=name, **kwargs)

    def list_ids(self, filters=None, sort_key=None, page=1, page_size=10):
        result = self.service.list_products(filters, sort_key, page, page_size)
        self.assertTrue(result.ok, result.error_detail)
        return [card["id"] for card in result.value["products"]]

    def test_size_filter_matches_through_any_variant(self):
        product = self.make_product("Two Variant Shirt")
        variant_a = ProductVariantFactory(product=product, variant_name="Variant A")
        SizeFactory(variant=variant_a, size="S")
        SizeFactory(variant=variant_a, size="M")
        variant_b = ProductVariantFactory(product=product, variant_name="Variant B")
        SizeFactory(variant=variant_b, size="L")

        other = self.make_product("Large Only")
        SizeFactory(variant=ProductVariantFactory(product=other), size="L")

        result = self.service.list_products({"size": ["M"]})

        self.assertTrue(result.ok)
        self.assertEqual([card["id"] for card in result.value["products"]], [str(product.id)])
        # Only the variant that satisfied the filter is shown on the card
        card = result.value["products"][0]
        self.assertEqual([variant["variant_id"] for variant in card["variants"]], [str(variant_a.id)])

    def test_variant_filters_must_hold_on_the_same_variant(self):
        product = self.make_product("Split Shirt")
        black = ProductVariantFactory(product=product)
        ColorFactory(variant=black, name="Black")
        SizeFactory(variant=black, size="S")
        white = ProductVariantFactory(product=product)
        ColorFactory(variant=white, name="White")
        SizeFactory(variant=white, size="M")

        self.assertEqual(self.list_ids({"size": ["M"], "color": ["Black"]}), [])
        self.assertEqual(self.list_ids({"size": ["M"], "color": ["White"]}), [str(product.id)])

    def test_price_range_filters_on_list_price(self):
        cheap = self.make_product("Cheap")
        SizeFactory(variant=ProductVariantFactory(product=cheap), price=Decimal("15.00"), discount=Decimal("50"))
        pricey = self.make_product("Pricey")
        SizeFactory(variant=ProductVariantFactory(product=pricey), price=Decimal("150.00"))

        self.assertEqual(self.list_ids({"min_price": "10", "max_price": "20"}), [str(cheap.id)])
        self.assertEqual(self.list_ids({"min_price": "100"}), [str(pricey.id)])
        self.assertEqual(sorted(self.list_ids({"max_price": "1000"})), sorted([str(cheap.id), str(pricey.id)]))

    def test_unresolved_reference_is_ignored(self):
        first = self.make_product("First")
        second = self.make_product("Second")

        ids = self.list_ids({"category": "no-such-category"})

        self.assertEqual(sorted(ids), sorted([str(first.id), str(second.id)]))

    def test_reference_filters(self):
        offer = OfferTagFactory(url="summer-sale")
        other_store = StoreFactory(url="other-store")
        on_sale = self.make_product("On Sale", offer_tag=offer)
        elsewhere = self.make_product("Elsewhere", store=other_store)
        other_category = SubCategoryFactory(url="lamps")
        lamp = ProductFactory(name="Lamp", sub_category=other_category, store=self.store)

        self.assertEqual(self.list_ids({"offer": "summer-sale"}), [str(on_sale.id)])
        self.assertEqual(self.list_ids({"store": "other-store"}), [str(elsewhere.id)])
        self.assertEqual(self.list_ids({"sub_category": "lamps"}), [str(lamp.id)])
        self.assertNotIn(str(lamp.id), self.list_ids({"category": "fashion"}))

    def test_search_matches_product_and_variant_text(self):
        by_name = self.make_product("Linen Shirt")
        by_variant = self.make_product("Summer Top")
        ProductVariantFactory(product=by_variant, variant_name="Linen blend")
        self.make_product("Wool Coat")

        ids = self.list_ids(ProductFilterRequest(search="linen"))

        self.assertEqual(sorted(ids), sorted([str(by_name.id), str(by_variant.id)]))

    def test_exclude_product(self):
        kept = self.make_product("Kept")
        excluded = self.make_product("Excluded")

        self.assertEqual(self.list_ids({"product_id_to_exclude": str(excluded.id)}), [str(kept.id)])

    def test_most_popular_sort(self):
        low = self.make_product("Low", views=5)
        high = self.make_product("High", views=500)

        self.assertEqual(self.list_ids(sort_key="most-popular"), [str(high.id), str(low.id)])

    def test_new_arrivals_is_the_default(self):
        older = self.make_product("Older")
        newer = self.make_product("Newer")
        Product.objects.filter(pk=older.pk).update(created_at=timezone.now() - timedelta(days=2))

        self.assertEqual(self.list_ids(), [str(newer.id), str(older.id)])
        self.assertEqual(self.list_ids(sort_key="new-arrivals"), [str(newer.id), str(older.id)])

    def test_top_rated_sort(self):
        meh = self.make_product("Meh", rating=2.5)
        great = self.make_product("Great", rating=4.8)

        self.assertEqual(self.list_ids(sort_key="top-rated"), [str(great.id), str(meh.id)])

    def test_price_sort_is_global_across_pages(self):
        prices = {"p1": "50.00", "p2": "10.00", "p3": "30.00", "p4": "20.00", "p5": "40.00"}
        products = {}
        for name, price in prices.items():
            products[name] = self.make_product(name)
            SizeFactory(variant=ProductVariantFactory(product=products[name]), price=Decimal(price))
        bare = self.make_product("bare")

        page_1 = self.list_ids(sort_key="price-low-to-high", page=1, page_size=2)
        page_2 = self.list_ids(sort_key="price-low-to-high", page=2, page_size=2)
        page_3 = self.list_ids(sort_key="price-low-to-high", page=3, page_size=2)

        expected = [str(products[name].id) for name in ("p2", "p4", "p3", "p5", "p1")] + [str(bare.id)]
        self.assertEqual(page_1 + page_2 + page_3, expected)

        descending = self.list_ids(sort_key="price-high-to-low", page_size=10)
        self.assertEqual(descending[-1], str(bare.id))
        self.assertEqual(descending[0], str(products["p1"].id))

    def test_price_sort_uses_discounted_price(self):
        discounted = self.make_product("Discounted")
        SizeFactory(variant=ProductVariantFactory(product=discounted), price=Decimal("100.00"), discount=Decimal("90"))
        regular = self.make_product("Regular")
        SizeFactory(variant=ProductVariantFactory(product=regular), price=Decimal("20.00"))

        self.assertEqual(self.list_ids(sort_key="price-low-to-high"), [str(discounted.id), str(regular.id)])

    def test_pagination_metadata(self):
        for index in range(5):
            self.make_product(f"Paged {index}")

        result = self.service.list_products(page=2, page_size=2)

        self.assertTrue(result.ok)
        self.assertEqual(result.value["total_count"], 5)
        self.assertEqual(result.value["total_pages"], 3)
        self.assertEqual(result.value["page_size"], 2)
        self.assertEqual(len(result.value["products"]), 2)

    def test_page_past_the_end(self):
        self.make_product("Only")

        result = self.service.list_products(page=4, page_size=10)

        self.assertTrue(result.ok)
        self.assertEqual(result.value["products"], [])
        self.assertEqual(result.value["total_count"], 1)

    def test_listing_is_idempotent(self):
        for index in range(4):
            product = self.make_product(f"Stable {index}")
            SizeFactory(variant=ProductVariantFactory(product=product), price=Decimal("10.00"))

        first = self.service.list_products(sort_key="price-low-to-high", page_size=3)
        second = self.service.list_products(sort_key="price-low-to-high", page_size=3)

        self.assertEqual(first.value, second.value)

    def test_get_product_by_slug(self):
        product = self.make_product("Findable")

        result = self.service.get_product(product.slug)

        self.assertTrue(result.ok)
        self.assertEqual(result.value.pk, product.pk)
        self.assertEqual(result.value.store, self.store)
