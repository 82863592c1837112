from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

from .catalog_service import SORT_KEYS, CatalogService
from .filters import FilterPredicateBuilder, ProductFilterRequest, ProductPredicates
from .pricing_service import VariantPriceResolver


__all__ = [
    "BaseService",
    "ErrorCodes",
    "ServiceResult",
    "service_err",
    "service_ok",
    "CatalogService",
    "SORT_KEYS",
    "FilterPredicateBuilder",
    "ProductFilterRequest",
    "ProductPredicates",
    "VariantPriceResolver",
]
