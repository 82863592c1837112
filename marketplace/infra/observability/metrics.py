from prometheus_client import Counter, Histogram


# Catalog Metrics
catalog_queries_total = Counter("marketplace_catalog_queries_total", "Catalog browse queries", ["sort", "status"])
catalog_query_results = Histogram(
    "marketplace_catalog_query_results",
    "Number of products matching a catalog query",
    buckets=[0, 1, 10, 50, 100, 500, 1000, 5000, float("inf")],
)
catalog_unresolved_filters_total = Counter(
    "marketplace_catalog_unresolved_filters_total", "Filter references that did not resolve", ["filter"]
)

# Shipping Metrics
shipping_quotes_total = Counter("marketplace_shipping_quotes_total", "Shipping quotes computed", ["method", "outcome"])
shipping_fee_amount = Histogram(
    "marketplace_shipping_fee_amount",
    "Shipping fee distribution",
    buckets=[0, 5, 10, 20, 50, 100, 200, float("inf")],
)
