from decimal import Decimal, InvalidOperation

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer, error_payload
from marketplace.services.base import ErrorCodes
from marketplace.shipping.api.serializers.shipping_serializers import (
    ShippingQuoteSerializer,
    StoreShippingSerializer,
)


# ServiceResult error code -> HTTP status
ERROR_STATUS = {
    ErrorCodes.PRODUCT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.STORE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.UNSERVICEABLE_DESTINATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCodes.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_SHIPPING_METHOD: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error_response(result) -> Response:
    return Response(
        error_payload(result), status=ERROR_STATUS.get(result.error, status.HTTP_500_INTERNAL_SERVER_ERROR)
    )


def _bad_request(detail: str) -> Response:
    return Response({"error": ErrorCodes.INVALID_INPUT, "detail": detail}, status=status.HTTP_400_BAD_REQUEST)


class ShippingViewSet(viewsets.ViewSet):
    """
    ViewSet for shipping quotes and store shipping details.
    Delegates logic to ShippingService.
    """

    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="product_shipping_quote",
        summary="Quote product shipping",
        description=(
            "Shipping fee and delivery details of a product for the visitor's country. "
            "The country comes from the `country` parameter, else from the userCountry cookie."
        ),
        parameters=[
            OpenApiParameter(name="country", type=str, description="ISO country code (overrides the cookie)"),
            OpenApiParameter(name="quantity", type=int, description="Number of units (default: 1)"),
            OpenApiParameter(name="weight", type=float, description="Unit weight in kg (default: first variant)"),
        ],
        responses={
            200: ShippingQuoteSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid quantity or weight"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
            422: OpenApiResponse(response=ErrorResponseSerializer, description="Destination not serviceable"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid shipping method"),
        },
        tags=["Marketplace - Shipping"],
    )
    def product_quote(self, request, product_slug=None):
        try:
            quantity = int(request.query_params.get("quantity") or 1)
        except ValueError:
            return _bad_request("quantity must be an integer")

        weight = request.query_params.get("weight")
        if weight not in (None, ""):
            try:
                weight = Decimal(weight)
            except InvalidOperation:
                return _bad_request("weight must be a number")
            if not weight.is_finite():
                return _bad_request("weight must be a number")
        else:
            weight = None

        product_result = container.catalog_service().get_product(product_slug)
        if not product_result.ok:
            return _error_response(product_result)

        country_code = (request.query_params.get("country") or "").strip()
        if country_code:
            country = {"name": "", "code": country_code.upper()}
        else:
            country = container.country_resolver().resolve(request)

        result = container.shipping_service().get_shipping_details(
            product_result.value, country, quantity=quantity, weight=weight
        )
        if not result.ok:
            return _error_response(result)

        return Response(ShippingQuoteSerializer(result.value.to_dict()).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="store_shipping_details",
        summary="Store shipping details",
        description="Default shipping details of a store and its per-country rates.",
        responses={
            200: StoreShippingSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Store not found"),
        },
        tags=["Marketplace - Shipping"],
    )
    def store_rates(self, request, store_url=None):
        service = container.shipping_service()

        defaults = service.get_store_default_shipping(store_url)
        if not defaults.ok:
            return _error_response(defaults)

        rates = service.list_store_shipping_rates(store_url)
        if not rates.ok:
            return _error_response(rates)

        data = {
            "store": store_url,
            "default_shipping": defaults.value.to_dict(),
            "shipping_rates": rates.value,
        }
        return Response(StoreShippingSerializer(data).data, status=status.HTTP_200_OK)
