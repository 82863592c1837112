"""
ASGI config for storefrontBackend project.

It exposes the ASGI callable as a module-level variable named ``application``.

For more information on this file, see
https://docs.djangoproject.com/en/5.0/howto/deployment/asgi/
"""

import os

from django.conf import settings
from django.core.asgi import get_asgi_application


os.environ.setdefault("DJANGO_SETTINGS_MODULE", "storefrontBackend.settings")

application = get_asgi_application()

# Tracing is set up once the app registry is ready.
from marketplace.infra.observability.tracing import setup_tracing  # noqa: E402

setup_tracing(
    service_name=settings.TRACING["SERVICE_NAME"],
    otlp_endpoint=settings.TRACING["OTLP_ENDPOINT"],
    enable=settings.TRACING["ENABLED"],
)
