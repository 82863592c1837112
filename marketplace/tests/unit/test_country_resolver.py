import json

import pytest
from django.test import RequestFactory, override_settings

from marketplace.shipping.infra.country import COUNTRY_COOKIE_NAME, CookieCountryResolver


@pytest.mark.unit
class TestCookieCountryResolverUnit:
    def setup_method(self):
        self.factory = RequestFactory()
        self.resolver = CookieCountryResolver(default={"name": "United States", "code": "US"})

    def _request(self, cookie=None):
        request = self.factory.get("/")
        if cookie is not None:
            request.COOKIES[COUNTRY_COOKIE_NAME] = cookie
        return request

    def test_reads_country_from_cookie(self):
        cookie = json.dumps({"name": "Canada", "code": "ca", "city": "", "region": ""})
        assert self.resolver.resolve(self._request(cookie)) == {"name": "Canada", "code": "CA"}

    def test_missing_cookie_uses_default(self):
        assert self.resolver.resolve(self._request()) == {"name": "United States", "code": "US"}

    def test_malformed_cookie_uses_default(self):
        assert self.resolver.resolve(self._request("{not json")) == {"name": "United States", "code": "US"}

    def test_cookie_without_code_uses_default(self):
        cookie = json.dumps({"name": "Canada"})
        assert self.resolver.resolve(self._request(cookie)) == {"name": "United States", "code": "US"}

    def test_default_is_not_shared(self):
        country = self.resolver.resolve(self._request())
        country["code"] = "FR"
        assert self.resolver.resolve(self._request())["code"] == "US"

    @override_settings(DEFAULT_USER_COUNTRY={"name": "Portugal", "code": "PT"})
    def test_default_comes_from_settings(self):
        resolver = CookieCountryResolver()
        assert resolver.resolve(self._request()) == {"name": "Portugal", "code": "PT"}
