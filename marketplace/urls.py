from django.urls import path

from .api.views import prometheus_metrics
from .catalog.api.views.browse_views import CatalogBrowseViewSet
from .shipping.api.views.shipping_views import ShippingViewSet

app_name = "marketplace"

urlpatterns = [
    # Catalog listing
    path("products/browse/", CatalogBrowseViewSet.as_view({"get": "browse"}), name="product-browse"),
    # Shipping
    path(
        "products/<slug:product_slug>/shipping/",
        ShippingViewSet.as_view({"get": "product_quote"}),
        name="product-shipping",
    ),
    path(
        "stores/<slug:store_url>/shipping/",
        ShippingViewSet.as_view({"get": "store_rates"}),
        name="store-shipping",
    ),
    # Prometheus metrics endpoint
    path("metrics/", prometheus_metrics.marketplace_prometheus_metrics, name="marketplace-metrics"),
]
