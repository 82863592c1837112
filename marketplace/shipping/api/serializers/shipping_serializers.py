from rest_framework import serializers

from marketplace.shipping.domain.methods import SHIPPING_FEE_METHODS


class ShippingQuoteSerializer(serializers.Serializer):
    """Shipping fee and delivery details of a product for one destination."""

    fee = serializers.DecimalField(max_digits=10, decimal_places=2)
    service = serializers.CharField()
    delivery_time_min = serializers.IntegerField()
    delivery_time_max = serializers.IntegerField()
    return_policy = serializers.CharField()
    is_free_shipping = serializers.BooleanField()
    shipping_fee_method = serializers.ChoiceField(choices=list(SHIPPING_FEE_METHODS))
    country_code = serializers.CharField()
    country_name = serializers.CharField()
    quantity = serializers.IntegerField()
    weight = serializers.DecimalField(max_digits=10, decimal_places=3)


class ShippingParamsSerializer(serializers.Serializer):
    service = serializers.CharField()
    fee_per_item = serializers.DecimalField(max_digits=10, decimal_places=2)
    fee_per_additional_item = serializers.DecimalField(max_digits=10, decimal_places=2)
    fee_per_kg = serializers.DecimalField(max_digits=10, decimal_places=2)
    fee_fixed = serializers.DecimalField(max_digits=10, decimal_places=2)
    delivery_time_min = serializers.IntegerField()
    delivery_time_max = serializers.IntegerField()
    return_policy = serializers.CharField()


class ShippingCountrySerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    code = serializers.CharField()


class RateOverridesSerializer(serializers.Serializer):
    """Only the fields the store set for the country; the rest fall back to the defaults."""

    service = serializers.CharField(required=False)
    fee_per_item = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    fee_per_additional_item = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    fee_per_kg = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    fee_fixed = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    delivery_time_min = serializers.IntegerField(required=False)
    delivery_time_max = serializers.IntegerField(required=False)
    return_policy = serializers.CharField(required=False)


class CountryShippingRateSerializer(serializers.Serializer):
    country = ShippingCountrySerializer()
    shipping_rate = RateOverridesSerializer(allow_null=True)


class StoreShippingSerializer(serializers.Serializer):
    store = serializers.CharField()
    default_shipping = ShippingParamsSerializer()
    shipping_rates = CountryShippingRateSerializer(many=True)
