from decimal import Decimal

from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.tests.factories import (
    ColorFactory,
    ProductFactory,
    ProductVariantFactory,
    SizeFactory,
    VariantImageFactory,
)


class BrowseViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("marketplace:product-browse")

        self.phone = ProductFactory(name="Demo Smartphone")
        self.variant = ProductVariantFactory(product=self.phone, variant_name="Black Edition")
        SizeFactory(variant=self.variant, size="128GB", price=Decimal("999.99"), discount=Decimal("10"))
        ColorFactory(variant=self.variant, name="Black")
        VariantImageFactory(variant=self.variant, url="https://img.example.com/phone.jpg")

        self.case = ProductFactory(name="Phone Case")
        SizeFactory(variant=ProductVariantFactory(product=self.case), size="One Size", price=Decimal("19.99"))

    def test_browse_returns_cards(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_count"], 2)
        self.assertEqual(response.data["current_page"], 1)
        self.assertEqual(response.data["page_size"], 10)

        phone_card = next(card for card in response.data["products"] if card["id"] == str(self.phone.id))
        self.assertEqual(phone_card["min_price"], "899.99")
        self.assertEqual(phone_card["variants"][0]["colors"], ["Black"])
        self.assertEqual(phone_card["variants"][0]["sizes"][0]["price"], "999.99")
        self.assertEqual(
            phone_card["variant_images"][0],
            {"url": f"/product/{self.phone.slug}/{self.variant.slug}", "image": "https://img.example.com/phone.jpg"},
        )

    def test_browse_filters_by_repeated_size(self):
        response = self.client.get(self.url, {"size": ["128GB", "256GB"]})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([card["id"] for card in response.data["products"]], [str(self.phone.id)])

    def test_browse_sorts_by_price(self):
        response = self.client.get(self.url, {"sort": "price-low-to-high"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [card["id"] for card in response.data["products"]], [str(self.case.id), str(self.phone.id)]
        )

    def test_browse_paginates(self):
        response = self.client.get(self.url, {"page": 2, "pageSize": 1})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_pages"], 2)
        self.assertEqual(len(response.data["products"]), 1)

    def test_browse_unknown_category_is_ignored(self):
        response = self.client.get(self.url, {"category": "does-not-exist"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_count"], 2)

    def test_browse_rejects_bad_page(self):
        for params in ({"page": "abc"}, {"page": 0}, {"pageSize": -3}):
            response = self.client.get(self.url, params)
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(response.data["error"], "invalid_input")

    @override_settings(CATALOG={"DEFAULT_PAGE_SIZE": 10, "MAX_PAGE_SIZE": 1})
    def test_page_size_is_capped(self):
        response = self.client.get(self.url, {"pageSize": 50})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["page_size"], 1)
        self.assertEqual(len(response.data["products"]), 1)

    def test_metrics_endpoint(self):
        self.client.get(self.url)

        response = self.client.get(reverse("marketplace:marketplace-metrics"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn(b"marketplace_catalog_queries_total", response.content)
