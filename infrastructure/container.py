"""
Dependency Injection Container
================================

Simple service locator pattern for managing repository and service dependencies.
Services receive their repositories through this container unless one is
injected explicitly (tests inject fakes or mocks).

Usage:
    from infrastructure.container import container

    catalog = container.catalog_service()
    shipping = container.shipping_service()
"""

import logging
from typing import Optional

from django.conf import settings

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for repositories and domain services.

    Implements lazy initialization and caching of service instances.
    Singleton pattern.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize container (only once)."""
        if not self._initialized:
            self._catalog_repository = None
            self._shipping_repository = None
            self._country_resolver = None

            # Domain Services
            self._catalog_service = None
            self._shipping_service = None

            self._initialized = True
            logger.info("Service container initialized")

    @staticmethod
    def _backend(key: str) -> str:
        return getattr(settings, "INFRASTRUCTURE", {}).get(key, "django")

    def catalog_repository(self):
        """
        Get catalog repository instance.

        Returns:
            CatalogRepository implementation (cached)
        """
        if self._catalog_repository is None:
            backend = self._backend("CATALOG_REPOSITORY")
            if backend != "django":
                raise ValueError(f"Unsupported catalog repository backend: {backend}")

            from marketplace.catalog.domain.repositories import DjangoCatalogRepository

            self._catalog_repository = DjangoCatalogRepository()
            logger.debug(f"Created catalog repository: {type(self._catalog_repository).__name__}")

        return self._catalog_repository

    def shipping_repository(self):
        """
        Get shipping repository instance.

        Returns:
            ShippingRepository implementation (cached)
        """
        if self._shipping_repository is None:
            backend = self._backend("SHIPPING_REPOSITORY")
            if backend != "django":
                raise ValueError(f"Unsupported shipping repository backend: {backend}")

            from marketplace.shipping.domain.repositories import DjangoShippingRepository

            self._shipping_repository = DjangoShippingRepository()
            logger.debug(f"Created shipping repository: {type(self._shipping_repository).__name__}")

        return self._shipping_repository

    def country_resolver(self):
        """Get the visitor country resolver."""
        if self._country_resolver is None:
            from marketplace.shipping.infra.country import CookieCountryResolver

            self._country_resolver = CookieCountryResolver()
            logger.debug("Created CookieCountryResolver")
        return self._country_resolver

    def catalog_service(self):
        """Get CatalogService instance."""
        if self._catalog_service is None:
            from marketplace.catalog.domain.services import CatalogService

            self._catalog_service = CatalogService(repository=self.catalog_repository())
            logger.debug("Created CatalogService")
        return self._catalog_service

    def shipping_service(self):
        """Get ShippingService instance."""
        if self._shipping_service is None:
            from marketplace.shipping.domain.services import ShippingService

            self._shipping_service = ShippingService(repository=self.shipping_repository())
            logger.debug("Created ShippingService")
        return self._shipping_service

    def reset(self):
        """
        Reset all cached instances.

        Useful for testing or when switching between environments.
        """
        self._catalog_repository = None
        self._shipping_repository = None
        self._country_resolver = None
        self._catalog_service = None
        self._shipping_service = None
        logger.info("Service container reset")


# Global singleton instance
container = ServiceContainer()
