# Marketplace API Serializers

from .response_serializers import ErrorResponseSerializer, error_payload


__all__ = [
    "ErrorResponseSerializer",
    "error_payload",
]
