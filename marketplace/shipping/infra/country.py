"""
Visitor country resolution.

The storefront stores the visitor's country in the ``userCountry`` cookie as
JSON, e.g. ``{"name": "Canada", "code": "CA", "city": "", "region": ""}``.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from django.conf import settings

logger = logging.getLogger(__name__)

COUNTRY_COOKIE_NAME = "userCountry"


class CountryResolver(ABC):
    """Abstract interface resolving the requesting visitor's country."""

    @abstractmethod
    def resolve(self, request) -> Dict[str, str]:
        """
        Resolve the visitor's country.

        Returns:
            Dict with ``name`` and ``code``
        """
        pass


class CookieCountryResolver(CountryResolver):
    """Reads the ``userCountry`` cookie, falling back to the configured default country."""

    def __init__(self, default: Optional[Dict[str, str]] = None):
        self.default = dict(default or settings.DEFAULT_USER_COUNTRY)

    def resolve(self, request) -> Dict[str, str]:
        raw = request.COOKIES.get(COUNTRY_COOKIE_NAME)
        if not raw:
            return dict(self.default)

        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning(f"Error parsing {COUNTRY_COOKIE_NAME} cookie: {e}")
            return dict(self.default)

        if not isinstance(data, dict) or not data.get("code"):
            logger.warning(f"Ignoring {COUNTRY_COOKIE_NAME} cookie without a country code")
            return dict(self.default)

        return {"name": str(data.get("name") or ""), "code": str(data["code"]).upper()}
