"""
Response Serializers for Marketplace API Documentation

These serializers define the structure of API responses for OpenAPI schema generation
and render the plain dicts returned by the catalog and shipping services.
"""

from rest_framework import serializers

# ===== Common Response Serializers =====


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    error = serializers.CharField(help_text="Error code identifier")
    detail = serializers.CharField(help_text="Human-readable error details", required=False)


def error_payload(result) -> dict:
    """Body of an error response for a failed ServiceResult."""
    return {"error": result.error, "detail": result.error_detail}
