"""
Marketplace Service Layer

Shared result type and base class for the catalog and shipping services.

Usage:
    from marketplace.services import service_ok, service_err

    result = catalog_service.list_products(filters={"category": "fashion"})

    if result.ok:
        products = result.value["products"]
    else:
        error = result.error
"""

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

__all__ = [
    "BaseService",
    "ServiceResult",
    "service_ok",
    "service_err",
    "ErrorCodes",
]
