from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer, error_payload
from marketplace.catalog.api.serializers.card_serializers import ProductCardPageSerializer
from marketplace.catalog.domain.services import SORT_KEYS, CatalogService, ProductFilterRequest
from marketplace.services.base import ErrorCodes


def _positive_int(value, default, name):
    if value in (None, ""):
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer")
    if parsed < 1:
        raise ValueError(f"{name} must be >= 1")
    return parsed


class CatalogBrowseViewSet(viewsets.ViewSet):
    """
    ViewSet for the storefront catalog listing.
    Delegates logic to CatalogService.
    """

    permission_classes = [AllowAny]

    def get_service(self) -> CatalogService:
        return container.catalog_service()

    @extend_schema(
        operation_id="products_browse",
        summary="Browse products",
        description=(
            "List products matching the filters as simplified cards. Size, color and price "
            "filters must all hold for the same variant. Unknown category, subCategory, offer "
            "or store urls are ignored."
        ),
        parameters=[
            OpenApiParameter(name="search", type=str, description="Text in product or variant name/description"),
            OpenApiParameter(name="category", type=str, description="Category url"),
            OpenApiParameter(name="subCategory", type=str, description="Sub category url"),
            OpenApiParameter(name="offer", type=str, description="Offer tag url"),
            OpenApiParameter(name="store", type=str, description="Store url"),
            OpenApiParameter(name="size", type=str, description="Size label (can be multiple)", many=True),
            OpenApiParameter(name="color", type=str, description="Color name (can be multiple)", many=True),
            OpenApiParameter(name="minPrice", type=float, description="Minimum list price of a size"),
            OpenApiParameter(name="maxPrice", type=float, description="Maximum list price of a size"),
            OpenApiParameter(name="productId", type=str, description="Product id to exclude"),
            OpenApiParameter(name="sort", type=str, description="Sort key", enum=list(SORT_KEYS)),
            OpenApiParameter(name="page", type=int, description="Page number (default: 1)"),
            OpenApiParameter(name="pageSize", type=int, description="Items per page (default: 10)"),
        ],
        responses={
            200: ProductCardPageSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid pagination"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Internal server error"),
        },
        tags=["Marketplace - Catalog"],
    )
    def browse(self, request):
        catalog_settings = getattr(settings, "CATALOG", {})
        default_page_size = catalog_settings.get("DEFAULT_PAGE_SIZE", 10)
        max_page_size = catalog_settings.get("MAX_PAGE_SIZE", 100)

        try:
            page = _positive_int(request.query_params.get("page"), 1, "page")
            page_size = _positive_int(request.query_params.get("pageSize"), default_page_size, "pageSize")
        except ValueError as e:
            return Response(
                {"error": ErrorCodes.INVALID_INPUT, "detail": str(e)}, status=status.HTTP_400_BAD_REQUEST
            )

        filters = ProductFilterRequest.from_query_params(request.query_params)
        result = self.get_service().list_products(
            filters,
            sort_key=request.query_params.get("sort"),
            page=page,
            page_size=min(page_size, max_page_size),
        )

        if not result.ok:
            response_status = (
                status.HTTP_400_BAD_REQUEST
                if result.error == ErrorCodes.INVALID_INPUT
                else status.HTTP_500_INTERNAL_SERVER_ERROR
            )
            return Response(error_payload(result), status=response_status)

        return Response(ProductCardPageSerializer(result.value).data, status=status.HTTP_200_OK)
