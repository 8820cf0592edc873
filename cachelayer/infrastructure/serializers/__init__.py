"""Cache payload serializers."""

from cachelayer.infrastructure.serializers.json_serializer import JsonSerializer

__all__ = ["JsonSerializer"]
