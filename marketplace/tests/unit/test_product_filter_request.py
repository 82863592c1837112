from decimal import Decimal
from unittest.mock import Mock

import pytest
from django.http import QueryDict

from marketplace.catalog.domain.services.filters import FilterPredicateBuilder, ProductFilterRequest


@pytest.mark.unit
class TestProductFilterRequestUnit:
    def test_from_query_params_reads_storefront_names(self):
        params = QueryDict(
            "search=phone&category=electronics&subCategory=smartphones&offer=deals&store=demo"
            "&size=S&size=M&color=Black&minPrice=10&maxPrice=99.5&productId=abc"
        )
        request = ProductFilterRequest.from_query_params(params)

        assert request.search == "phone"
        assert request.category == "electronics"
        assert request.sub_category == "smartphones"
        assert request.offer == "deals"
        assert request.store == "demo"
        assert request.size == ["S", "M"]
        assert request.color == ["Black"]
        assert request.min_price == Decimal("10")
        assert request.max_price == Decimal("99.5")
        assert request.product_id_to_exclude == "abc"

    def test_from_query_params_accepts_plain_dict(self):
        request = ProductFilterRequest.from_query_params({"size": "L", "color": ["Red", "Blue"]})

        assert request.size == ["L"]
        assert request.color == ["Red", "Blue"]

    def test_non_numeric_prices_are_ignored(self):
        request = ProductFilterRequest.from_query_params(QueryDict("minPrice=cheap&maxPrice=NaN"))

        assert request.min_price is None
        assert request.max_price is None

    def test_blank_values_are_unset(self):
        request = ProductFilterRequest(search="   ", size="", color=None)

        assert request.search is None
        assert request.size == []
        assert request.color == []
        assert request.to_log_dict() == {}

    def test_from_dict_ignores_unknown_keys(self):
        request = ProductFilterRequest.from_dict({"category": "fashion", "colour": "Red"})

        assert request.category == "fashion"
        assert request.color == []

    def test_from_dict_none(self):
        assert ProductFilterRequest.from_dict(None) == ProductFilterRequest()


@pytest.mark.unit
class TestFilterPredicateBuilderUnit:
    def setup_method(self):
        self.repository = Mock()
        self.builder = FilterPredicateBuilder(self.repository)

    def test_empty_request_has_no_conditions(self):
        predicates = self.builder.build(ProductFilterRequest())

        assert predicates.product_conditions == []
        assert predicates.variant_conditions == []

    def test_unresolved_reference_contributes_nothing(self):
        self.repository.lookup_category_id.return_value = None

        predicates = self.builder.build(ProductFilterRequest(category="does-not-exist"))

        self.repository.lookup_category_id.assert_called_once_with("does-not-exist")
        assert predicates.product_conditions == []

    def test_resolved_references_add_one_condition_each(self):
        self.repository.lookup_category_id.return_value = "cat-id"
        self.repository.lookup_store_id.return_value = "store-id"

        predicates = self.builder.build(ProductFilterRequest(category="fashion", store="demo"))

        assert len(predicates.product_conditions) == 2

    def test_variant_filters_share_one_product_condition(self):
        predicates = self.builder.build(
            ProductFilterRequest(size=["M"], color=["Black"], min_price=Decimal("5"), max_price=Decimal("50"))
        )

        assert len(predicates.variant_conditions) == 3
        assert len(predicates.product_conditions) == 1

    def test_malformed_exclude_id_is_ignored(self):
        predicates = self.builder.build(ProductFilterRequest(product_id_to_exclude="not-a-uuid"))
        assert predicates.product_conditions == []

    def test_exclude_id_adds_condition(self):
        predicates = self.builder.build(
            ProductFilterRequest(product_id_to_exclude="6f1c1d36-6a3e-4c49-9a59-1f1f8e1e2b11")
        )
        assert len(predicates.product_conditions) == 1
